"""의존성 주입 컨테이너 모듈.

Dependency injection container module.
A single process-wide ``dependency_injector`` ``DynamicContainer`` holds
every provider. Tokens are classes or strings; class constructors are
auto-wired from their ``__init__`` type hints when the instance is built,
so registration order inside a layer does not matter.

Usage:
    from zacatl.container import register_singleton, resolve_dependency, Inject

    class GreetingRepository: ...

    class GreetingService:
        def __init__(self, repository: GreetingRepository) -> None:
            self.repository = repository

    register_singleton(GreetingRepository)
    register_singleton(GreetingService)
    service = resolve_dependency(GreetingService)

    # 문자열 토큰 주입 — string tokens
    class Mailer:
        def __init__(self, api_key: Annotated[str, Inject("MAILER_API_KEY")]) -> None: ...
"""

import inspect
import re
import types
import typing
from dataclasses import dataclass
from typing import Any, Annotated, TypeVar, Union, get_args, get_origin, get_type_hints

from dependency_injector import containers, providers

from zacatl.utils.exceptions import CustomError, InternalServerError

T = TypeVar("T")
Token = Union[type, str]


@dataclass(frozen=True)
class Inject:
    """파라미터 주입 토큰 표시 (Marks the token to inject for a parameter)."""

    token: Token


# 전역 컨테이너 — process-wide container
_container: containers.DynamicContainer = containers.DynamicContainer()


def get_container() -> containers.DynamicContainer:
    return _container


def clear_container() -> None:
    """모든 등록을 제거합니다 (Drop every registration, mainly for tests)."""
    global _container
    _container = containers.DynamicContainer()


def _token_name(token: Token) -> str:
    raw: str = token if isinstance(token, str) else f"{token.__module__}.{token.__qualname__}"
    return "dep_" + re.sub(r"\W", "_", raw)


def _token_label(token: Token) -> str:
    return token if isinstance(token, str) else token.__name__


def _get_provider(token: Token) -> providers.Provider | None:
    return _container.providers.get(_token_name(token))


def is_registered(token: Token) -> bool:
    return _get_provider(token) is not None


def _hint_token(hint: Any) -> Token | None:
    """타입 힌트에서 주입 토큰을 추출합니다 (Token for a parameter annotation)."""
    if hint is None:
        return None
    if get_origin(hint) is Annotated:
        base, *extras = get_args(hint)
        for extra in extras:
            if isinstance(extra, Inject):
                return extra.token
        return _hint_token(base)
    if get_origin(hint) in (Union, types.UnionType):
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        return _hint_token(members[0]) if len(members) == 1 else None
    if isinstance(hint, type):
        return hint
    return None


def _instantiate(cls: type[T]) -> T:
    """생성자 파라미터를 해석하여 인스턴스를 생성합니다.

    Build ``cls`` resolving every registered constructor dependency.
    Parameters that cannot be resolved keep their default value.
    """
    try:
        hints: dict[str, Any] = get_type_hints(cls.__init__, include_extras=True)
    except (NameError, TypeError) as exc:
        raise InternalServerError(
            message=f"Cannot read constructor annotations of '{cls.__name__}'",
            reason=str(exc),
            component="DIContainer",
            operation="instantiate",
            error=exc,
        ) from exc

    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(cls).parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        token = _hint_token(hints.get(name))
        if token is not None and is_registered(token):
            kwargs[name] = resolve_dependency(token)
        elif param.default is inspect.Parameter.empty:
            raise InternalServerError(
                message=f"Cannot resolve parameter '{name}' of '{cls.__name__}'",
                reason="Parameter has no default and its type is not registered",
                component="DIContainer",
                operation="instantiate",
                metadata={"class": cls.__name__, "parameter": name},
            )
    return cls(**kwargs)


def register_dependency(token: Token, cls: type | None = None) -> None:
    """팩토리 등록 — 해석할 때마다 새 인스턴스 (New instance per resolve)."""
    target = cls or token
    if isinstance(target, str):
        raise InternalServerError(
            message=f"String token '{token}' needs a class to build",
            component="DIContainer",
            operation="register_dependency",
        )
    _container.set_provider(_token_name(token), providers.Factory(_instantiate, target))


def register_singleton(token: Token, cls: type | None = None) -> None:
    """싱글턴 등록 — 최초 해석 시 한 번만 생성 (Built once on first resolve)."""
    target = cls or token
    if isinstance(target, str):
        raise InternalServerError(
            message=f"String token '{token}' needs a class to build",
            component="DIContainer",
            operation="register_singleton",
        )
    _container.set_provider(_token_name(token), providers.Singleton(_instantiate, target))


def register_value(token: Token, value: Any) -> None:
    """고정 값 등록 (Register an already-built object)."""
    _container.set_provider(_token_name(token), providers.Object(value))


def resolve_dependency(token: type[T] | str) -> T:
    """토큰으로 인스턴스를 해석합니다.

    Raises:
        InternalServerError: 등록되지 않은 토큰 (Token is not registered)
    """
    provider = _get_provider(token)
    if provider is None:
        raise InternalServerError(
            message=f"Dependency '{_token_label(token)}' is not registered",
            component="DIContainer",
            operation="resolve_dependency",
            metadata={"token": _token_label(token)},
        )
    return provider()


def resolve_dependencies(classes: typing.Sequence[type]) -> list[Any]:
    """클래스 목록을 순서대로 해석합니다.

    Resolve ``classes`` in order.

    Raises:
        InternalServerError: 미등록 클래스 또는 생성 실패
                             (Unregistered class, or its construction failed)
    """
    instances: list[Any] = []
    for cls in classes:
        if not is_registered(cls):
            raise InternalServerError(
                message=f"Failed to resolve '{cls.__name__}': it is not registered",
                reason=(
                    "Declare it in layers.infrastructure.repositories, layers.domain.providers, "
                    "layers.domain.services or layers.application.entry_points"
                ),
                component="DIContainer",
                operation="resolve_dependencies",
                metadata={"class": cls.__name__},
            )
        try:
            instances.append(resolve_dependency(cls))
        except CustomError:
            raise
        except Exception as exc:
            raise InternalServerError(
                message=f"Failed to resolve '{cls.__name__}'",
                reason=str(exc),
                component="DIContainer",
                operation="resolve_dependencies",
                metadata={"class": cls.__name__},
                error=exc,
            ) from exc
    return instances


def register_dependencies(classes: typing.Sequence[type]) -> None:
    """클래스 목록을 싱글턴으로 등록 (Register each class as its own singleton)."""
    for cls in classes:
        register_singleton(cls)


def register_and_resolve(classes: typing.Sequence[type]) -> list[Any]:
    register_dependencies(classes)
    return resolve_dependencies(classes)
