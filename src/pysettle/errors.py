from __future__ import annotations

from pprint import saferepr
from typing import Any


class SettleError(Exception):
    """Base class for pysettle errors."""


class SpecError(SettleError):
    """Raised when the settings spec itself is misconfigured."""


class InputError(SettleError):
    """Raised when change input does not fit the settings spec."""


class SettingError(SettleError):
    """Error about one particular setting.

    ``name`` is the bare setting name, ``path`` the keys leading to it from
    the root of the settings tree.
    """

    def __init__(self, message: str, name: str, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.name = name
        self.path = path or (name,)


class HookError(SettingError):
    """Raised when a user supplied hook fails unexpectedly.

    The original exception is kept on :attr:`cause` and chained via
    ``raise ... from``.
    """

    def __init__(
        self,
        message: str,
        name: str,
        cause: BaseException,
        path: tuple[str, ...] = (),
    ) -> None:
        super().__init__(f"{message}\n{cause}", name, path)
        self.summary = message
        self.cause = cause


# ----- spec errors -----


class InvalidInitializerKind(SpecError, SettingError):
    """Raised when an initializer is a static value instead of a function."""

    def __init__(self, name: str, initial: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Initializer for setting "{name}" was configured with a static value. '
            f"It must be a function. Got: {saferepr(initial)}",
            name,
            path,
        )
        self.initial = initial


class InvalidTypeMapper(SpecError, SettingError):
    """Raised when a type mapper is not callable."""

    def __init__(self, name: str, map_type: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Type mapper for setting "{name}" was invalid. Type mappers must be '
            f"functions. Got: {saferepr(map_type)}",
            name,
            path,
        )
        self.map_type = map_type


class InvalidSpecifier(SpecError, SettingError):
    """Raised when a spec entry is not a Leaf, Namespace or Record."""

    def __init__(self, name: str, specifier: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Setting "{name}" has an unknown kind of specifier: {saferepr(specifier)}',
            name,
            path,
        )
        self.specifier = specifier


# ----- input errors -----


class InputNotAMapping(InputError):
    """Raised when the input handed to ``change`` is not a mapping."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Settings input must be an object of settings but received: {saferepr(value)}"
        )
        self.value = value


class UnknownSetting(InputError, SettingError):
    def __init__(self, name: str, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'You are trying to change a setting called "{name}" but no such setting exists',
            name,
            path,
        )


class NotANamespace(InputError, SettingError):
    def __init__(self, name: str, value: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Setting "{name}" is not a namespace and so does not accept objects, '
            f"but one given: {saferepr(value)}",
            name,
            path,
        )
        self.value = value


class NotARecord(InputError, SettingError):
    def __init__(self, name: str, value: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Setting "{name}" is a record and so expects an object of entries '
            f"but received a non-object: {saferepr(value)}",
            name,
            path,
        )
        self.value = value


class ShorthandNotSupported(InputError, SettingError):
    def __init__(self, name: str, value: Any, path: tuple[str, ...] = ()) -> None:
        SettingError.__init__(
            self,
            f'Setting "{name}" is a namespace with no shorthand so expects an object '
            f"but received a non-object: {saferepr(value)}",
            name,
            path,
        )
        self.value = value


class ValidationFailed(InputError, SettingError):
    """Raised when a validator rejects a setting value."""

    def __init__(
        self,
        name: str,
        value: Any,
        messages: list[str],
        path: tuple[str, ...] = (),
    ) -> None:
        bullets = "\n".join(f"- {m}" for m in messages)
        SettingError.__init__(
            self,
            f'Your setting "{name}" failed validation with value {saferepr(value)}:\n\n{bullets}',
            name,
            path,
        )
        self.value = value
        self.messages = list(messages)


# ----- hook errors -----


class ShorthandError(HookError):
    def __init__(
        self, name: str, value: Any, cause: BaseException, path: tuple[str, ...] = ()
    ) -> None:
        super().__init__(
            f"There was an unexpected error while running the namespace shorthand for "
            f'setting "{name}". The given value was {saferepr(value)}',
            name,
            cause,
            path,
        )
        self.value = value


class InitializerError(HookError):
    def __init__(self, name: str, cause: BaseException, path: tuple[str, ...] = ()) -> None:
        super().__init__(
            f'There was an unexpected error while running the initializer for setting "{name}"',
            name,
            cause,
            path,
        )


class FixupError(HookError):
    def __init__(
        self, name: str, value: Any, cause: BaseException, path: tuple[str, ...] = ()
    ) -> None:
        super().__init__(
            f'Fixup for "{name}" failed while running on value {saferepr(value)}',
            name,
            cause,
            path,
        )
        self.value = value


class OnFixupError(HookError):
    def __init__(self, name: str, cause: BaseException, path: tuple[str, ...] = ()) -> None:
        super().__init__(f'on_fixup callback for "{name}" failed', name, cause, path)


class ValidationRuntimeError(HookError):
    def __init__(
        self, name: str, value: Any, cause: BaseException, path: tuple[str, ...] = ()
    ) -> None:
        super().__init__(
            f'Validation for "{name}" unexpectedly failed while running on value '
            f"{saferepr(value)}",
            name,
            cause,
            path,
        )
        self.value = value


class TypeMapperError(HookError):
    def __init__(self, name: str, cause: BaseException, path: tuple[str, ...] = ()) -> None:
        super().__init__(
            f'There was an unexpected error while running the type mapper for setting "{name}"',
            name,
            cause,
            path,
        )


# ----- sources -----


class SourceLoadError(SettleError):
    """Raised when an input source fails to load or parse."""


__all__ = [
    "SettleError",
    "SpecError",
    "InputError",
    "SettingError",
    "HookError",
    "InvalidInitializerKind",
    "InvalidTypeMapper",
    "InvalidSpecifier",
    "InputNotAMapping",
    "UnknownSetting",
    "NotANamespace",
    "NotARecord",
    "ShorthandNotSupported",
    "ValidationFailed",
    "ShorthandError",
    "InitializerError",
    "FixupError",
    "OnFixupError",
    "ValidationRuntimeError",
    "TypeMapperError",
    "SourceLoadError",
]
