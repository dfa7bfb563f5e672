"""Pure builders for the backend and UI container specs."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from ll_common.errors import ConfigurationError
from ll_core.models.types import (
    BackendConfig,
    BackendKind,
    ContainerSpec,
    PortMapping,
    ResolvedEndpoint,
    VolumeMount,
)
from ll_core.resolver import LOCALAI_CONTAINER_PORT, OLLAMA_DEFAULT_PORT

UI_CONTAINER_PORT = 8080
UI_DATA_TARGET = "/app/backend/data"
OLLAMA_MODELS_TARGET = "/root/.ollama/models"
LOCALAI_MODELS_TARGET = "/build/models"
DEFAULT_OLLAMA_DEVICE = "iGPU"


def ollama_models_dir(base_dir: Path) -> Path:
    return base_dir / "models" / "ollama"


def localai_models_dir(base_dir: Path) -> Path:
    return base_dir / "models" / "localai"


def ui_data_dir(base_dir: Path) -> Path:
    return base_dir / "data" / "open-webui"


def _require_image(kind: BackendKind, config: BackendConfig) -> str:
    if not config.image:
        raise ConfigurationError(
            f"Backend '{kind.value}' requires an image",
            context={"backend": kind.value, "field": "image"},
            hint="llm-launcher config edit",
        )
    return config.image


def _resource_flags(config: BackendConfig, *, memory: bool) -> List[str]:
    flags: List[str] = []
    if memory and config.memory_limit:
        flags.append(f"--memory={config.memory_limit}")
    if config.shm_size:
        flags.append(f"--shm-size={config.shm_size}")
    flags.extend(config.extra_flags)
    return flags


def _drop_option(args: List[str], option: str) -> List[str]:
    """Remove ``option`` in both its ``--opt value`` and ``--opt=value`` forms."""
    kept: List[str] = []
    skip_value = False
    for arg in args:
        if skip_value:
            skip_value = False
            continue
        if arg == option:
            skip_value = True
            continue
        if arg.startswith(f"{option}="):
            continue
        kept.append(arg)
    return kept


def _ollama_container_spec(
    config: BackendConfig, network: str, base_dir: Path
) -> ContainerSpec:
    kind = BackendKind.CONTAINERIZED_OLLAMA
    container_port = config.container_port or OLLAMA_DEFAULT_PORT
    device = config.device or DEFAULT_OLLAMA_DEVICE
    start_script = (
        "cd /llm/scripts && "
        f"source ipex-llm-init --gpu --device {device} && "
        "bash start-ollama.sh && tail -f /dev/null"
    )
    return ContainerSpec(
        name=config.host or "",
        image=_require_image(kind, config),
        network=network,
        ports=(PortMapping(config.port or container_port, container_port),),
        env={"OLLAMA_HOST": "0.0.0.0", "DEVICE": device},
        volumes=(
            VolumeMount(str(ollama_models_dir(base_dir)), OLLAMA_MODELS_TARGET),
        ),
        extra_flags=tuple(_resource_flags(config, memory=True)),
        command=("bash", "-c", start_script),
    )


def _localai_container_spec(
    config: BackendConfig, network: str, base_dir: Path
) -> ContainerSpec:
    kind = BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE
    container_port = config.container_port or LOCALAI_CONTAINER_PORT
    command: List[str] = []
    if config.model:
        command.append(config.model)
    extra_args = list(config.extra_args)
    if config.threads:
        command.extend(["--threads", str(config.threads)])
        extra_args = _drop_option(extra_args, "--threads")
    command.extend(extra_args)
    return ContainerSpec(
        name=config.host or "",
        image=_require_image(kind, config),
        network=network,
        ports=(PortMapping(config.port or container_port, container_port),),
        env={
            "DEBUG": "true",
            "MODELS_PATH": LOCALAI_MODELS_TARGET,
            "THREADS": "1",
        },
        volumes=(
            VolumeMount(str(localai_models_dir(base_dir)), LOCALAI_MODELS_TARGET),
        ),
        extra_flags=tuple(_resource_flags(config, memory=False)),
        command=tuple(command),
    )


def backend_container_spec(
    kind: BackendKind, config: BackendConfig, network: str, base_dir: Path
) -> ContainerSpec:
    """Return the spec for a containerized backend; other kinds have none."""
    if kind == BackendKind.CONTAINERIZED_OLLAMA:
        return _ollama_container_spec(config, network, base_dir)
    if kind == BackendKind.CONTAINERIZED_OPENAI_COMPATIBLE:
        return _localai_container_spec(config, network, base_dir)
    raise ValueError(f"Backend '{kind.value}' does not run in a container")


def ui_container_spec(
    *,
    name: str,
    image: str,
    port: int,
    endpoint: ResolvedEndpoint,
    network: str,
    base_dir: Path,
) -> ContainerSpec:
    """Return the Open WebUI spec wired to ``endpoint``."""
    env: Dict[str, str] = {"WEBUI_AUTH": "false"}
    env.update(endpoint.env)
    return ContainerSpec(
        name=name,
        image=image,
        network=network,
        ports=(PortMapping(port, UI_CONTAINER_PORT),),
        env=env,
        volumes=(VolumeMount(str(ui_data_dir(base_dir)), UI_DATA_TARGET),),
        extra_flags=tuple(endpoint.extra_flags),
    )
