"""Setup of the full-capability stage and factories for both stages."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from edgetrace.config import EdgeTraceConfig, load_config
from edgetrace.errors import InitializationError
from edgetrace.instrumentation.edge import EdgeStage
from edgetrace.instrumentation.http_server import ServerStage
from edgetrace.instrumentation.requests import patch_requests, unpatch_requests
from edgetrace.processors.logging_processor import (
    install_log_correlation,
    uninstall_log_correlation,
)
from edgetrace.tracer.provider import TracerProvider
from edgetrace.tracer.tracer import Tracer

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_provider: Optional[TracerProvider] = None
_config: Optional[EdgeTraceConfig] = None


def init(config_file: Optional[str] = None, **overrides: Any) -> TracerProvider:
    """
    Set up tracing for the full-capability stage.

    Builds the SDK-backed provider, patches requests and installs log
    correlation according to configuration. Calling init() again returns the
    existing provider.

    Raises:
        ConfigError: if configuration is invalid
        InitializationError: if the SDK provider cannot be created
    """
    global _provider, _config
    with _lock:
        if _provider is not None:
            logger.warning("edgetrace is already initialized; init() returns the existing provider")
            return _provider

        config = load_config(config_file=config_file, overrides=overrides)
        try:
            provider = TracerProvider(resource={"service.name": config.tracing.service_name})
        except Exception as e:
            raise InitializationError(
                "Failed to create tracer provider", {"error": str(e)}
            ) from e

        if config.instrumentation.enable_patching:
            patch_requests()
        if config.instrumentation.log_correlation:
            install_log_correlation()

        _provider = provider
        _config = config
        logger.debug(f"edgetrace initialized for service {config.tracing.service_name}")
        return provider


def stop_tracing() -> None:
    """Shut the provider down and undo patching. init() may be called again."""
    global _provider, _config
    with _lock:
        if _provider is None:
            return
        try:
            _provider.shutdown()
        finally:
            unpatch_requests()
            uninstall_log_correlation()
            _provider = None
            _config = None


def is_initialized() -> bool:
    return _provider is not None


def get_config() -> EdgeTraceConfig:
    """Active configuration, or configuration loaded from files and environment."""
    return _config or load_config()


def get_tracer_provider() -> TracerProvider:
    """Return the active provider, initializing with defaults on first use."""
    with _lock:
        if _provider is None:
            return init()
        return _provider


def get_tracer(name: str) -> Tracer:
    return get_tracer_provider().get_tracer(name)


def edge_stage(config: Optional[EdgeTraceConfig] = None) -> EdgeStage:
    """Build the edge stage from configuration."""
    config = config or get_config()
    return EdgeStage(
        name=config.edge.stage_name,
        matcher=config.edge.matcher,
        preserve_upstream=config.edge.preserve_upstream,
    )


def server_stage(
    config: Optional[EdgeTraceConfig] = None,
    tracer: Optional[Tracer] = None,
) -> ServerStage:
    """Build the server stage; its tracer defaults to the active provider's."""
    config = config or get_config()
    return ServerStage(
        name="http.request",
        tracer=tracer or get_tracer(config.tracing.service_name),
    )
