"""Form requests used by the API controllers."""

from api.forms.records import CreateRequest, UpdateRequest

__all__ = ["CreateRequest", "UpdateRequest"]
