"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides `OpenTelemetry` integration for this package. It
sets up a tracer and records layered errors on spans, turning the
sentinels and metadata of an error into span event attributes so they
can be searched in a tracing backend.
"""

from __future__ import annotations

import typing as t

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.trace import Status
from opentelemetry.trace import StatusCode

from lamina.core.base import describe
from lamina.core.config import Config
from lamina.core.extract import error_children
from lamina.core.extract import error_metadata

__all__: list[str] = [
    "error_attributes",
    "get_tracer",
    "record_error",
]

_PRIMITIVES: t.Final[tuple[type, ...]] = (str, bool, int, float)


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Configure and return a tracer.

    This function sets up `OpenTelemetry TracerProvider` based on the
    package configuration. Console export is used in debug mode and
    OTLP export otherwise.

    :param config: An optional configuration object, defaults to a
        fresh `Config` instance.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    if config is None:
        config = Config()
    service = name or config.telemetry.name or config.name
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": getattr(config, "version", "unknown"),
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
            "telemetry.sdk.name": "lamina",
        }
    )
    provider = TracerProvider(resource=resource)
    if config.telemetry.enable:
        if config.debug:
            processor = SimpleSpanProcessor(ConsoleSpanExporter())
        else:
            try:
                processor = BatchSpanProcessor(OTLPSpanExporter())
            except Exception:
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return trace.get_tracer(service)


def _attribute(value: t.Any) -> str | bool | int | float:
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, BaseException):
        return describe(value)
    return repr(value)


def error_attributes(error: BaseException) -> dict[str, t.Any]:
    """Flatten a layered error into span attributes.

    Repeated metadata keys keep the most recent value.

    :param error: Error to flatten.
    :return: Attributes following the `exception.*` conventions, plus
        `lamina.children` and one `lamina.meta.<key>` per metadata key.
    """
    attributes: dict[str, t.Any] = {
        "exception.type": type(error).__qualname__,
        "exception.message": str(error),
    }
    children = error_children(error)
    if children:
        attributes["lamina.children"] = [describe(child) for child in children]
    for key, value in error_metadata(error):
        attributes[f"lamina.meta.{key}"] = _attribute(value)
    return attributes


def record_error(span: trace.Span, error: BaseException) -> None:
    """Record a layered error on a span and mark the span as failed.

    Unlike `Span.record_exception`, no stack trace is attached.

    :param span: Span to record the error on.
    :param error: Error to record.
    """
    span.add_event("exception", attributes=error_attributes(error))
    span.set_status(Status(StatusCode.ERROR, describe(error)))
