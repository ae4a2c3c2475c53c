from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

# Alle Records kommen entweder als JSON-Dict oder als SDK-Record (Attribute) an
RECORD_CONFIG = ConfigDict(from_attributes=True, extra="ignore")

ToastType = Literal["info", "success", "warning", "error"]


class Species(BaseModel):
    model_config = RECORD_CONFIG

    id: str = ""
    name: str = ""
    description: Optional[str] = None


class PlantExpand(BaseModel):
    model_config = RECORD_CONFIG

    species: Optional[Species] = None


class Plant(BaseModel):
    model_config = RECORD_CONFIG

    id: str = ""
    species: Optional[str] = None  # Species-ID
    quantity: Optional[float] = None  # PocketBase "number"
    expand: Optional[PlantExpand] = None


class ContainerExpand(BaseModel):
    model_config = RECORD_CONFIG

    plants: Optional[List[Plant]] = None
    user: Optional[Any] = None


class Container(BaseModel):
    model_config = RECORD_CONFIG

    id: str = ""
    name: str = ""
    location: str = ""
    size: str = ""
    plants: List[str] = []
    last_watered: Optional[str] = None
    expand: Optional[ContainerExpand] = None

    @field_validator("plants", mode="before")
    @classmethod
    def _empty_relation(cls, value):
        # PocketBase liefert "" bzw. null für leere Relationen
        return value or []

    @field_validator("last_watered", mode="before")
    @classmethod
    def _empty_date(cls, value):
        return value or None


class User(BaseModel):
    """Auth record of the signed-in user."""

    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
    verified: bool = False

    @classmethod
    def from_record(cls, record) -> Optional["User"]:
        if record is None or isinstance(record, cls):
            return record
        if isinstance(record, dict):
            return cls.model_validate(record) if record.get("id") else None
        if not getattr(record, "id", None):
            return None
        return cls.model_validate(record, from_attributes=True)

    @property
    def display_name(self) -> str:
        return self.name or self.username or self.email or self.id


class PlantWithQuantity(BaseModel):
    id: str
    species: str
    quantity: Union[int, float]


class SpeciesCount(BaseModel):
    species: str
    count: int


class ToastData(BaseModel):
    type: ToastType = "info"
    title: Optional[str] = None
    description: str
    dismissible: Optional[bool] = None
    progress: Optional[float] = None
    duration: Optional[int] = None  # ms


class ToastOptions(BaseModel):
    type: ToastType = "info"
    title: Optional[str] = None
    duration: Optional[int] = None


class Toast(BaseModel):
    id: str
    data: ToastData
    created_at: float  # Sekunden (time.monotonic)
