class ConfigError(Exception):
    """Base class for every error raised while loading or reading a config."""


class MissingEnvironmentError(ConfigError):
    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Environment Variable `{variable}` empty or not defined")


class ConfigNotFoundError(ConfigError, FileNotFoundError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"config file not found: {self.path}")

    def __str__(self):
        return self.args[0]


class ConfigParseError(ConfigError):
    """The file exists but could not be read or parsed into a table."""

    def __init__(self, path, reason):
        self.path = str(path)
        super().__init__(f"failed to parse config file {self.path}: {reason}")


class MissingKeyError(ConfigError, KeyError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"configuration property {key!r} not found")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class EmptyValueError(ConfigError, ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"empty value for {key!r}")


class TypeMismatchError(ConfigError, TypeError):
    def __init__(self, key: str, value, expected: str):
        self.key = key
        self.expected = expected
        super().__init__(
            f"invalid type for {key!r}: {type(value).__name__} {value!r}, expected {expected}"
        )
