"""\
Configurations
==============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides the settings read by `lamina.utils.logging.configure`
and `lamina.utils.opentelemetry.get_tracer`. The error engine itself has
no configuration, it behaves the same regardless of these settings.

Every settings object is built from `setting` descriptors. Values are
checked when they are assigned, either through keywords at construction
or later as plain attributes::

    config = LoggerConfig(level="INFO", tty=ConsoleLoggerConfig(enable=True))
    config.as_json = True
"""

from __future__ import annotations

import typing as t

from lamina.core.error import ConfigValidationError

if t.TYPE_CHECKING:
    from collections.abc import Collection

__all__: tuple[str, ...] = (
    "Config",
    "ConsoleLoggerConfig",
    "LoggerConfig",
    "Settings",
    "TelemetryConfig",
    "setting",
)

_LOG_LEVELS: tuple[str, ...] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)
# NOTE(xames3): The `extra` attribute is filled in by the formatters of
# `lamina.utils.logging` with the fields attached to each engine event,
# like the rejected position or the foreign origin identifier.
_DEFAULT_LOG_FMT: t.Final[str] = (
    "%(asctime)s %(levelname)s %(qualName)s:%(lineno)d %(extra)s: %(message)s"
)
_DEFAULT_LOG_DATEFMT: t.Final[str] = "%Y-%m-%dT%H:%M:%SZ"


T = t.TypeVar("T")


class setting(t.Generic[T]):  # noqa: N801
    """Checked attribute of a settings object.

    The value lives in the instance `__dict__` under the attribute name,
    so instances never share state. The class attribute stays the
    descriptor, which keeps the default and the constraints.

    :param default: Value returned until one is assigned.
    :param kind: Type every assigned value must have, defaults to
        `None`.
    :param choices: Accepted values, defaults to `None`.
    :param frozen: Whether assignment is refused, defaults to `False`.
    """

    __slots__: tuple[str, ...] = (
        "choices",
        "default",
        "frozen",
        "kind",
        "name",
    )

    def __init__(
        self,
        default: T,
        *,
        kind: type | None = None,
        choices: Collection[T] | None = None,
        frozen: bool = False,
    ) -> None:
        """Initialise a setting."""
        self.default = default
        self.kind = kind
        self.choices = choices
        self.frozen = frozen
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        """Bind the setting to its attribute name.

        :raises ConfigValidationError: If the default does not pass the
            setting's own checks.
        """
        self.name = name
        try:
            self.check(self.default)
        except ConfigValidationError as error:
            raise ConfigValidationError(
                f"bad default for {owner.__name__}.{name}: {error}"
            ) from error

    @t.overload
    def __get__(self, instance: None, owner: type) -> setting[T]: ...

    @t.overload
    def __get__(self, instance: object, owner: type) -> T: ...

    def __get__(self, instance: object | None, owner: type) -> setting[T] | T:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance: object, value: T) -> None:
        if self.frozen:
            raise ConfigValidationError(f"{self.name!r} is read-only")
        self.check(value)
        instance.__dict__[self.name] = value

    def check(self, value: t.Any) -> None:
        """Check `value` against the type and the choices.

        :param value: Candidate value.
        :raises ConfigValidationError: If the value is refused.
        """
        if self.kind is not None and not isinstance(value, self.kind):
            raise ConfigValidationError(
                f"{self.name!r} expects {self.kind.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.choices is not None and value not in self.choices:
            raise ConfigValidationError(
                f"{value!r} is not a valid {self.name!r}, expected one of "
                f"{', '.join(map(str, self.choices))}"
            )


class Settings:
    """Base of the settings objects.

    :param values: Initial values, keyed by setting name.
    :raises ConfigValidationError: If a keyword names no setting or a
        value is refused.
    """

    def __init__(self, **values: t.Any) -> None:
        """Initialise the settings from keywords."""
        names = self.names()
        for name, value in values.items():
            if name not in names:
                raise ConfigValidationError(
                    f"{type(self).__name__} has no setting {name!r}"
                )
            setattr(self, name, value)

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the setting names of the class, in declaration order."""
        return tuple(
            name
            for klass in reversed(cls.__mro__)
            for name, value in vars(klass).items()
            if isinstance(value, setting)
        )

    def __repr__(self) -> str:
        values = ", ".join(
            f"{name}={getattr(self, name)!r}" for name in self.names()
        )
        return f"{type(self).__name__}({values})"


class ConsoleLoggerConfig(Settings):
    """Console output of the package logger.

    Disabled by default. Turn it on to watch errors being rejected or
    enriched while debugging.
    """

    enable: setting[bool] = setting(False, kind=bool)
    level: setting[str] = setting("DEBUG", choices=_LOG_LEVELS)
    fmt: setting[str] = setting(_DEFAULT_LOG_FMT, kind=str)
    datefmt: setting[str] = setting(_DEFAULT_LOG_DATEFMT, kind=str)
    colour: setting[bool] = setting(True, kind=bool)


class LoggerConfig(Settings):
    """Package logger configuration.

    Only the `lamina` logger is affected, the application's own logging
    setup is left alone.

    :param tty: Console output settings, defaults to a fresh
        `ConsoleLoggerConfig`.
    """

    level: setting[str] = setting("WARNING", choices=_LOG_LEVELS)
    as_json: setting[bool] = setting(False, kind=bool)

    def __init__(
        self,
        *,
        tty: ConsoleLoggerConfig | None = None,
        **values: t.Any,
    ) -> None:
        """Initialise the logger configuration."""
        super().__init__(**values)
        self.tty = tty if tty is not None else ConsoleLoggerConfig()


class TelemetryConfig(Settings):
    """Tracer configuration."""

    enable: setting[bool] = setting(False, kind=bool)
    name: setting[str | None] = setting(None)


class Config(Settings):
    """Configuration.

    Groups the logging and telemetry settings of the package. The name
    and version identify the service in exported traces.

    :param logger: Logger settings, defaults to a fresh `LoggerConfig`.
    :param telemetry: Tracer settings, defaults to a fresh
        `TelemetryConfig`.
    """

    name: setting[str] = setting("lamina", frozen=True)
    version: setting[str] = setting("18.10.2026", frozen=True)
    debug: setting[bool] = setting(False, kind=bool)

    def __init__(
        self,
        *,
        logger: LoggerConfig | None = None,
        telemetry: TelemetryConfig | None = None,
        **values: t.Any,
    ) -> None:
        """Initialise the configuration."""
        super().__init__(**values)
        self.logger = logger if logger is not None else LoggerConfig()
        self.telemetry = (
            telemetry if telemetry is not None else TelemetryConfig()
        )
