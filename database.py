import logging
from typing import Callable, List, Optional

from pocketbase import PocketBase
from pocketbase.stores.base_auth_store import BaseAuthStore
from pocketbase.utils import ClientResponseError
from pydantic import ValidationError
from tinydb import TinyDB

from config import Settings
from models import Container, Species, User

logger = logging.getLogger(__name__)

CONTAINER_EXPAND = "plants,plants.species"

AuthListener = Callable[[str, Optional[User]], None]


class GardenDiaryError(Exception):
    """Base error for failures at the backend boundary."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class AuthenticationError(GardenDiaryError):
    """Login or token refresh was rejected."""


class RecordFetchError(GardenDiaryError):
    """Listing or loading records failed."""

    def __init__(self, message: str, status: int = 0, details: dict | None = None):
        super().__init__(message, details)
        self.status = status


def _parse(model, records, collection: str) -> list:
    try:
        return [model.model_validate(record, from_attributes=True) for record in records]
    except ValidationError as e:
        logger.error("Malformed record in %s: %s", collection, e)
        raise RecordFetchError(f"Unexpected data in {collection}", details={"errors": e.errors()}) from e


class ObservableAuthStore(BaseAuthStore):
    """
    Auth store that tells its listeners about every save (login, refresh)
    and clear (logout). With a path, the session is kept in a TinyDB file.
    """

    def __init__(self, path: Optional[str] = None):
        super().__init__()
        self._listeners: List[AuthListener] = []
        self._token = ""
        self._model: Optional[User] = None
        self._table = TinyDB(path, create_dirs=True).table("auth") if path else None
        self._load()

    def _load(self) -> None:
        if self._table is None:
            return
        stored = self._table.all()
        if not stored:
            return
        self._token = stored[0].get("token", "")
        self._model = User.from_record(stored[0].get("record"))
        logger.debug("Restored auth session from disk (user=%s)", self._model and self._model.id)

    def _persist(self) -> None:
        if self._table is None:
            return
        self._table.truncate()
        if self._token:
            record = self._model.model_dump(mode="json") if self._model else None
            self._table.insert({"token": self._token, "record": record})

    @property
    def token(self) -> str:
        return self._token

    @property
    def model(self) -> Optional[User]:
        return self._model

    @property
    def record(self) -> Optional[User]:
        return self._model

    def save(self, token: str = "", model=None) -> None:
        self._token = token or ""
        self._model = User.from_record(model)
        self._persist()
        self._notify()

    def clear(self) -> None:
        self._token = ""
        self._model = None
        self._persist()
        self._notify()

    def on_change(self, handler: AuthListener) -> Callable[[], None]:
        self._listeners.append(handler)

        def unsubscribe() -> None:
            if handler in self._listeners:
                self._listeners.remove(handler)

        return unsubscribe

    def _notify(self) -> None:
        for handler in list(self._listeners):
            try:
                handler(self._token, self._model)
            except Exception:
                logger.exception("Auth change listener %r failed", handler)


class RecordClient:
    """Thin wrapper around the PocketBase SDK for the records this app reads."""

    def __init__(
        self,
        settings: Settings,
        auth_store: Optional[ObservableAuthStore] = None,
        client: Optional[PocketBase] = None,
    ):
        self.settings = settings
        self.auth_store = auth_store or ObservableAuthStore(settings.AUTH_STORE_PATH or None)
        self.pb = client or PocketBase(
            settings.POCKETBASE_URL,
            auth_store=self.auth_store,
            timeout=settings.REQUEST_TIMEOUT,
        )

    def login(self, identity: str, password: str) -> Optional[User]:
        try:
            self.pb.collection(self.settings.AUTH_COLLECTION).auth_with_password(identity, password)
        except ClientResponseError as e:
            logger.info("Login for %s rejected (status %s)", identity, e.status)
            raise AuthenticationError("Invalid login credentials", details={"status": e.status}) from e
        logger.info("Logged in as %s", identity)
        return self.auth_store.model

    def logout(self) -> None:
        self.auth_store.clear()
        logger.info("Logged out")

    def refresh(self) -> Optional[User]:
        try:
            self.pb.collection(self.settings.AUTH_COLLECTION).auth_refresh()
        except ClientResponseError as e:
            logger.warning("Auth refresh failed (status %s), clearing session", e.status)
            self.auth_store.clear()
            raise AuthenticationError("Session expired", details={"status": e.status}) from e
        return self.auth_store.model

    def _query(self, **params) -> dict:
        user = self.auth_store.model
        if user is not None:
            params.setdefault("filter", f'user = "{user.id}"')
        return params

    def list_containers(self) -> List[Container]:
        collection = self.settings.CONTAINERS_COLLECTION
        try:
            records = self.pb.collection(collection).get_full_list(
                query_params=self._query(expand=CONTAINER_EXPAND, sort="-last_watered")
            )
        except ClientResponseError as e:
            raise RecordFetchError(f"Could not load {collection}", status=e.status) from e
        logger.debug("Fetched %d containers", len(records))
        return _parse(Container, records, collection)

    def get_container(self, container_id: str) -> Container:
        collection = self.settings.CONTAINERS_COLLECTION
        try:
            record = self.pb.collection(collection).get_one(
                container_id, query_params={"expand": CONTAINER_EXPAND}
            )
        except ClientResponseError as e:
            raise RecordFetchError(
                f"Could not load container {container_id}",
                status=e.status,
                details={"id": container_id},
            ) from e
        return _parse(Container, [record], collection)[0]

    def list_species(self) -> List[Species]:
        collection = self.settings.SPECIES_COLLECTION
        try:
            records = self.pb.collection(collection).get_full_list(query_params={"sort": "name"})
        except ClientResponseError as e:
            raise RecordFetchError(f"Could not load {collection}", status=e.status) from e
        return _parse(Species, records, collection)
