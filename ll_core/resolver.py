"""Backend resolver: map a backend kind and its settings to network endpoints.

Probe URLs and UI URLs live in separate address namespaces. Probe URLs are
what this process (running on the host) can reach; UI URLs are what the UI
container can reach from inside the shared Docker network.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from ll_common.errors import ConfigurationError
from ll_core.models.types import (
    OLLAMA_PROTOCOL,
    OPENAI_PROTOCOL,
    BackendConfig,
    BackendKind,
    ResolvedEndpoint,
)

HOST_GATEWAY_ALIAS = "host.docker.internal"
HOST_GATEWAY_FLAG = f"--add-host={HOST_GATEWAY_ALIAS}:host-gateway"

OLLAMA_DEFAULT_PORT = 11434
OLLAMA_VERSION_PATH = "/api/version"
OPENAI_MODELS_PATH = "/models"
LOCALAI_CONTAINER_PORT = 8080

DEFAULT_LMSTUDIO_API_KEY = "lm-studio"
DEFAULT_LOCALAI_API_KEY = "localai"

_LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}

_PROTOCOL_TOGGLES: Dict[str, Dict[str, str]] = {
    OLLAMA_PROTOCOL: {
        "ENABLE_OLLAMA_API": "true",
        "ENABLE_OPENAI_API": "false",
        "ENABLE_DIRECT_CONNECTIONS": "false",
    },
    OPENAI_PROTOCOL: {
        "ENABLE_OLLAMA_API": "false",
        "ENABLE_OPENAI_API": "true",
        "ENABLE_DIRECT_CONNECTIONS": "true",
    },
}


def _require_host(kind: BackendKind, config: BackendConfig) -> str:
    host = (config.host or "").strip()
    if not host:
        raise ConfigurationError(
            f"Backend '{kind.value}' requires a host",
            context={"backend": kind.value, "field": "host"},
            hint="llm-launcher config edit",
        )
    return host


def _port_or_default(
    kind: BackendKind, config: BackendConfig, default: Optional[int]
) -> int:
    port = config.port if config.port is not None else default
    if port is None:
        raise ConfigurationError(
            f"Backend '{kind.value}' requires a port",
            context={"backend": kind.value, "field": "port"},
            hint="llm-launcher config edit",
        )
    if not 0 < int(port) < 65536:
        raise ConfigurationError(
            f"Backend '{kind.value}' has an invalid port: {port}",
            context={"backend": kind.value, "field": "port", "value": port},
        )
    return int(port)


def _env(kind: BackendKind, protocol_env: Mapping[str, str]) -> Dict[str, str]:
    env = dict(_PROTOCOL_TOGGLES[kind.protocol])
    env.update(protocol_env)
    return env


def _resolve_local_process(config: BackendConfig) -> ResolvedEndpoint:
    kind = BackendKind.LOCAL_PROCESS
    port = _port_or_default(kind, config, OLLAMA_DEFAULT_PORT)
    ui_base = f"http://{HOST_GATEWAY_ALIAS}:{port}"
    return ResolvedEndpoint(
        kind=kind,
        probe_url=f"http://localhost:{port}{OLLAMA_VERSION_PATH}",
        ui_base_url=ui_base,
        connectivity_url=f"{ui_base}{OLLAMA_VERSION_PATH}",
        container_url=None,
        env=_env(
            kind,
            {"OLLAMA_BASE_URL": ui_base, "OLLAMA_API_HOST": HOST_GATEWAY_ALIAS},
        ),
        extra_flags=(HOST_GATEWAY_FLAG,),
    )


def _resolve_remote_openai(config: BackendConfig) -> ResolvedEndpoint:
    kind = BackendKind.REMOTE_OPENAI_COMPATIBLE
    host = _require_host(kind, config)
    port = _port_or_default(kind, config, None)
    api_base = f"http://{host}:{port}/v1"
    ui_base = api_base
    extra_flags: tuple[str, ...] = ()
    if host.lower() in _LOOPBACK_HOSTS:
        # Loopback inside the UI container is the container itself.
        ui_base = f"http://{HOST_GATEWAY_ALIAS}:{port}/v1"
        extra_flags = (HOST_GATEWAY_FLAG,)
    return ResolvedEndpoint(
        kind=kind,
        probe_url=f"{api_base}{OPENAI_MODELS_PATH}",
        ui_base_url=ui_base,
        connectivity_url=f"{ui_base}{OPENAI_MODELS_PATH}",
        container_url=None,
        env=_env(
            kind,
            {
                "OPENAI_API_KEY": config.api_key or DEFAULT_LMSTUDIO_API_KEY,
                "OPENAI_API_BASE_URL": ui_base,
            },
        ),
        extra_flags=extra_flags,
    )


def _resolve_containerized_ollama(config: BackendConfig) -> ResolvedEndpoint:
    kind = BackendKind.CONTAINERIZED_OLLAMA
    name = _require_host(kind, config)
    internal_port = config.container_port or OLLAMA_DEFAULT_PORT
    port = _port_or_default(kind, config, internal_port)
    container_url = f"http://{name}:{internal_port}"
    return ResolvedEndpoint(
        kind=kind,
        probe_url=f"http://localhost:{port}{OLLAMA_VERSION_PATH}",
        ui_base_url=container_url,
        connectivity_url=f"{container_url}{OLLAMA_VERSION_PATH}",
        container_url=container_url,
        env=_env(kind, {"OLLAMA_BASE_URL": container_url, "OLLAMA_API_HOST": name}),
    )


def _resolve_containerized_openai(config: BackendConfig) -> ResolvedEndpoint:
    kind = BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE
    name = _require_host(kind, config)
    internal_port = config.container_port or LOCALAI_CONTAINER_PORT
    port = _port_or_default(kind, config, internal_port)
    container_url = f"http://{name}:{internal_port}/v1"
    return ResolvedEndpoint(
        kind=kind,
        probe_url=f"http://localhost:{port}/v1{OPENAI_MODELS_PATH}",
        ui_base_url=container_url,
        connectivity_url=f"{container_url}{OPENAI_MODELS_PATH}",
        container_url=container_url,
        env=_env(
            kind,
            {
                "OPENAI_API_KEY": config.api_key or DEFAULT_LOCALAI_API_KEY,
                "OPENAI_API_BASE_URL": container_url,
            },
        ),
    )


_RESOLVERS: Dict[BackendKind, Callable[[BackendConfig], ResolvedEndpoint]] = {
    BackendKind.LOCAL_PROCESS: _resolve_local_process,
    BackendKind.REMOTE_OPENAI_COMPATIBLE: _resolve_remote_openai,
    BackendKind.CONTAINERIZED_OLLAMA: _resolve_containerized_ollama,
    BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE: _resolve_containerized_openai,
}


def resolve(kind: BackendKind, config: BackendConfig) -> ResolvedEndpoint:
    """Compute the endpoint for ``kind``; raise ConfigurationError on missing fields."""
    return _RESOLVERS[BackendKind(kind)](config)
