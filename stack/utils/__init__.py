import os


def getenv(key, default):
    value = os.getenv(key, default)
    if value is None:
        value = default
    elif type(value) == str:
        if len(value) == 0:
            value = default
    return value


def getenv_int(key, default: int) -> int:
    try:
        return int(getenv(key, default))
    except ValueError:
        return default


def getenv_bool(key, default: bool = False) -> bool:
    value = getenv(key, None)
    if value is None:
        return default
    return str(value).lower() == "true"
