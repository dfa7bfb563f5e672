"""Launcher configuration model (flat JSON file)."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ll_core.api import BackendConfig, BackendKind

DEFAULT_BASE_DIR = Path.home() / "llm"
DEFAULT_CONFIG_NAME = "llm-launcher.json"


class LauncherConfig(BaseModel):
    """Flat key/value settings shared by every backend."""

    docker_network: str = Field(default="ollama-network", description="Shared Docker network name")

    open_webui_image: str = Field(
        default="ghcr.io/open-webui/open-webui:main", description="Open WebUI image reference"
    )
    open_webui_name: str = Field(default="open-webui", description="Open WebUI container name")
    open_webui_port: int = Field(default=3000, ge=1, le=65535, description="Host port for Open WebUI")

    ollama_port: int = Field(default=11434, ge=1, le=65535, description="Port of Ollama on the host")

    ollama_container_image: str = Field(
        default="intelanalytics/ipex-llm-inference-cpp-xpu:latest",
        description="Image for the containerized Ollama backend",
    )
    ollama_container_name: str = Field(default="ollama-container", description="Ollama container name")
    ollama_container_port: int = Field(
        default=11434, ge=1, le=65535, description="Host port mapped to the Ollama container"
    )
    ollama_container_device: str = Field(default="iGPU", description="Intel GPU device for ipex-llm")

    lm_studio_host: str = Field(default="192.168.1.100", description="LM Studio host or IP address")
    lm_studio_port: int = Field(default=1234, ge=1, le=65535, description="LM Studio server port")
    lm_studio_api_key: str = Field(default="lm-studio", description="Placeholder API key for LM Studio")

    localai_image: str = Field(
        default="localai/localai:v2.27.0-sycl-f16-ffmpeg", description="LocalAI image reference"
    )
    localai_name: str = Field(default="localai-container", description="LocalAI container name")
    localai_port: int = Field(default=8080, ge=1, le=65535, description="Host port mapped to LocalAI")
    localai_model: str = Field(default="gemma-3-4b-it-qat", description="Model LocalAI loads at start")
    localai_extra_flags: str = Field(default="", description="Extra LocalAI command-line arguments")
    container_extra_flags: str = Field(
        default="--device=/dev/dri",
        description="Extra docker run flags for backend containers (GPU passthrough)",
    )

    memory_limit: Optional[str] = Field(default=None, description="Container memory limit, e.g. 16G")
    shm_size: Optional[str] = Field(default=None, description="Container shared memory size, e.g. 8g")
    threads: Optional[int] = Field(default=None, gt=0, description="Threads for LocalAI inference")

    network_diagnostic_timeout: float = Field(
        default=2.0, gt=0, description="Seconds allowed for each ping in network diagnostics"
    )
    base_dir: Path = Field(default=DEFAULT_BASE_DIR, description="Root for models, data and logs")
    use_sudo: bool = Field(default=False, description="Prefix container engine commands with sudo")

    @field_validator(
        "docker_network",
        "open_webui_name",
        "open_webui_image",
        "ollama_container_name",
        "localai_name",
    )
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must be non-empty")
        return value.strip()

    @field_validator("base_dir")
    @classmethod
    def _expand_base_dir(cls, value: Path) -> Path:
        return Path(value).expanduser()

    def backend_config(self, kind: BackendKind) -> BackendConfig:
        """Project the flat settings onto the record the resolver needs."""
        kind = BackendKind(kind)
        if kind == BackendKind.LOCAL_PROCESS:
            return BackendConfig(port=self.ollama_port)
        if kind == BackendKind.REMOTE_OPENAI_COMPATIBLE:
            return BackendConfig(
                host=self.lm_studio_host,
                port=self.lm_studio_port,
                api_key=self.lm_studio_api_key,
            )
        if kind == BackendKind.CONTAINERIZED_OLLAMA:
            return BackendConfig(
                host=self.ollama_container_name,
                port=self.ollama_container_port,
                image=self.ollama_container_image,
                memory_limit=self.memory_limit,
                shm_size=self.shm_size,
                device=self.ollama_container_device,
                extra_flags=self._container_flags(),
            )
        return BackendConfig(
            host=self.localai_name,
            port=self.localai_port,
            image=self.localai_image,
            shm_size=self.shm_size,
            threads=self.threads,
            model=self.localai_model,
            extra_flags=self._container_flags(),
            extra_args=tuple(shlex.split(self.localai_extra_flags)),
        )

    def _container_flags(self) -> tuple[str, ...]:
        return tuple(shlex.split(self.container_extra_flags))

    def save(self, filepath: Path) -> None:
        filepath.write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: Path) -> "LauncherConfig":
        return cls.model_validate_json(filepath.read_text())
