"""
Header Bag

ParameterBag specialised for HTTP header name/value pairs.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from .parameter_bag import ParameterBag


class HeaderBag(ParameterBag):
    """
    HTTP headers, stored verbatim.

    Header names are not case-normalised and values are not validated;
    whatever is set is what goes on the wire.
    """

    @classmethod
    def wrap(cls, headers: Union["HeaderBag", Mapping[str, Any], None]) -> "HeaderBag":
        """Return ``headers`` as a HeaderBag, wrapping plain mappings."""
        if isinstance(headers, HeaderBag):
            return headers
        return cls(headers)

    def to_lines(self) -> list[str]:
        """Serialize headers as ``Key: Value`` wire lines."""
        return [f"{key}: {value}" for key, value in self.all().items()]

    def to_wire(self) -> dict[str, str]:
        """Headers as a str -> str mapping suitable for a transport."""
        return {str(key): str(value) for key, value in self.all().items()}
