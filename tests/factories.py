"""Record builders and fakes shared by the tests."""

from models import Container


def plant(plant_id, species=None, quantity=None):
    """Raw plant record as returned by the backend with expand=plants.species."""
    data = {"id": plant_id, "species": f"sp_{plant_id}", "quantity": quantity}
    if species is not None:
        data["expand"] = {"species": {"id": f"sp_{plant_id}", "name": species}}
    return data


def container(plants=None, **fields):
    data = {"id": "c1", "name": "Balcony box", "location": "Balcony", "size": "60cm"}
    data.update(fields)
    if plants is not None:
        data["plants"] = [p["id"] for p in plants]
        data["expand"] = {"plants": plants}
    return Container.model_validate(data)


class FakeAuthSource:
    """Stands in for the PocketBase auth store."""

    def __init__(self, model=None):
        self.model = model
        self.handlers = []

    def on_change(self, handler):
        self.handlers.append(handler)
        return lambda: self.handlers.remove(handler)

    def emit(self, model, token="token"):
        self.model = model
        for handler in list(self.handlers):
            handler(token if model else "", model)


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
