from __future__ import annotations

import functools
import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Optional, Set, Union, get_type_hints

from mcp.server.fastmcp.exceptions import ToolError

from ..client import Engine
from ..errors import HTTPError

log = logging.getLogger("twapi.mcp.registry")

TOOLS_PACKAGE = "twapi.mcp.tools"
DELETE_PREFIX = "delete_"


def discover_tool_modules(package_name: str = TOOLS_PACKAGE) -> List[ModuleType]:
    """Import every module under the tools package, in name order."""
    base_pkg = importlib.import_module(package_name)
    names = sorted(
        info.name
        for info in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + ".")
    )
    return [importlib.import_module(name) for name in names]


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutines defined in ``module`` whose first parameter is ``engine``."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "engine":
            log.debug(
                "Skipping %s.%s: first parameter must be 'engine'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


def _public_signature(func: Callable) -> inspect.Signature:
    """``func``'s signature without ``engine``, with string annotations resolved."""
    hints = get_type_hints(func)
    sig = inspect.signature(func)
    params = [
        p.replace(annotation=hints.get(p.name, p.annotation))
        for p in list(sig.parameters.values())[1:]
    ]
    return sig.replace(
        parameters=params,
        return_annotation=hints.get("return", sig.return_annotation),
    )


def _wrap_tool(func: Callable, engine_provider: Callable[[], Engine]) -> Callable:
    """
    Return a wrapper that injects the engine and hides it from the signature.

    Client-side HTTP failures (4xx) become ``ToolError`` so the model sees the
    API message; anything else propagates unchanged.
    """

    @functools.wraps(func)
    async def call_tool(*args, **kwargs):
        try:
            return await func(engine_provider(), *args, **kwargs)
        except HTTPError as exc:
            if 400 <= exc.status_code < 500:
                raise ToolError(str(exc)) from exc
            raise

    # FastMCP builds the argument schema from these.
    sig = _public_signature(func)
    call_tool.__signature__ = sig  # type: ignore[attr-defined]
    call_tool.__annotations__ = {
        name: p.annotation for name, p in sig.parameters.items()
    }
    call_tool.__annotations__["return"] = sig.return_annotation
    del call_tool.__wrapped__
    return call_tool


def register_discovered_tools(
    app,
    engine_provider: Union[Callable[[], Engine], Engine],
    modules: Optional[List[ModuleType]] = None,
    *,
    allow_delete: bool = False,
) -> List[str]:
    """
    Register discovered tools on an app exposing a ``.tool`` decorator.

    Delete tools are only registered when ``allow_delete`` is set. Returns the
    registered tool names.
    """
    if isinstance(engine_provider, Engine):
        _engine = engine_provider

        def engine_provider() -> Engine:
            return _engine

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    if modules is None:
        modules = discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")
            seen_names.add(name)

            if name.startswith(DELETE_PREFIX) and not allow_delete:
                log.debug("Skipping delete tool %s", name)
                continue

            app.tool(name=name)(_wrap_tool(func, engine_provider))
            registered.append(name)
            log.info("Registered tool", extra={"tool": name})

    return registered


__all__ = [
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "TOOLS_PACKAGE",
]
