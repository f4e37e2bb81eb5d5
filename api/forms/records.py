"""
Record Form Requests

Validation rules for the records controller.
"""

from core.http import FormRequest


class CreateRequest(FormRequest):
    """Input for POST /records."""

    def rules(self) -> dict[str, str]:
        return {
            "domain": "string|required",
            "root_cname_target": "string|required",
            "sub_cname_target": "string|required",
            "pagerule_destination_url": "string|required",
        }


class UpdateRequest(FormRequest):
    """Input for PATCH /records/{record_id}. Every field is optional."""

    def rules(self) -> dict[str, str]:
        return {
            "domain": "string",
            "root_cname_target": "string",
            "sub_cname_target": "string",
            "pagerule_destination_url": "string",
        }
