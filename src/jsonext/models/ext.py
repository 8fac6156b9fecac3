from __future__ import annotations

from ..core.fragment import ShapedFragment
from ..core.raw import RawValue
from ..core.shape import NULL_OR_OBJECT


class Ext(ShapedFragment):
    """Extension slot holding ``null`` or a JSON object as undecoded text.

    Deserializing through `jsonext.io.loads` keeps the exact span from the
    input, and `jsonext.io.dumps` writes it back byte for byte. The typed view
    is only built on request via `try_into`.

    Examples:
        >>> from jsonext.models import Ext
        >>> ext = Ext.from_string('{"f1": "abc", "f2": 123}')
        >>> ext.try_into()["f2"]
        123
        >>> Ext.from_string("true")
        Traceback (most recent call last):
        ...
        jsonext.errors.SerializationError: invalid value: expected null or object
    """

    __slots__ = ()

    allowed_kinds = NULL_OR_OBJECT

    @classmethod
    def null(cls) -> Ext:
        """Return the ``null`` extension, i.e. no extension present."""
        return cls(RawValue("null"))
