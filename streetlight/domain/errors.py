class FleetError(Exception):
    """Base class for rejected fleet operations. State is unchanged when raised."""


class NotFound(FleetError, LookupError):
    def __init__(self, light_id: int) -> None:
        super().__init__(f"Light {light_id} not found")
        self.light_id = light_id


class ValidationError(FleetError, ValueError):
    pass
