"""Path segment converters.

Built-in converters for templated segments like ``{id:int}``. Captured
values are bound into ``context.params`` as strings; the converter only
decides which strings a segment accepts.
"""

from waypoint.errors import InvalidArguments

# regex fragment accepted by each converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "uuid": r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
    "path": r".+",
}


def converter_pattern(param_type: str) -> str:
    """Return the regex fragment for *param_type*.

    Raises ``InvalidArguments`` if *param_type* is not a registered converter.
    """
    try:
        return CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown segment converter {param_type!r}. Known converters: {known}"
        raise InvalidArguments(msg) from None
