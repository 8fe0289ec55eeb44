from functools import wraps
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

P = ParamSpec('P')
T = TypeVar('T')


def transactional(
    *,
    readonly: bool = False,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Run the wrapped coroutine as one database transaction.

    If the session already has a transaction open (e.g. a request-scoped
    unit of work), the call joins it and the outer owner commits.
    """
    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            session = _extract_session(args, kwargs)

            if session.in_transaction():
                result = await func(*args, **kwargs)
                if not readonly:
                    await session.flush()
                return result

            async with session.begin():
                return await func(*args, **kwargs)
        return wrapper
    return decorator


def _extract_session(args: tuple[Any, ...], kwargs: dict[str, Any]) -> AsyncSession:
    if args and isinstance(args[0], AsyncSession):
        return args[0]
    if 'db' in kwargs:
        return kwargs['db']
    if 'session' in kwargs:
        return kwargs['session']
    if args and isinstance(getattr(args[0], '_session', None), AsyncSession):
        return args[0]._session
    raise ValueError("No session found in function arguments")
