from sift.errors import InvalidInput


def int_field(source, name, message=None):
    raw = source.get(name)
    if raw is None or raw == "":
        raise InvalidInput(message or f"Missing {name}")
    # JSON true and 1.9 would otherwise pass through int().
    if isinstance(raw, (bool, float)):
        raise InvalidInput(f"{name} must be an integer id")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be an integer id")
