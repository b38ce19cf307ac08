"""Pydantic models for the persisted ``devctl.yaml`` configuration.

Keys are camelCase on disk (``labelSelector``, ``portMappings``) and
snake_case in Python.  Only the sections this tool edits are modeled in
detail; unknown keys are kept so a load/save round-trip never drops
settings owned by other tools.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

CONFIG_VERSION = "v1beta1"

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# --- Rule targets ---


@dataclass(frozen=True)
class BySelector:
    """Rule bound to pods matching a label selector."""

    selector: dict[str, str]


@dataclass(frozen=True)
class ByService:
    """Rule bound to a named entry of ``dev.selectors``."""

    name: str


RuleTarget = BySelector | ByService


# --- dev.ports ---


class PortMapping(BaseModel):
    """A single ``local:remote`` forwarded port pair."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    local_port: int
    remote_port: int

    def __str__(self) -> str:
        return f"{self.local_port}:{self.remote_port}"


class ForwardingRule(BaseModel):
    """An entry of ``dev.ports``.

    A rule targets either a label selector or a service name, never
    both: the service's own selector is authoritative.
    """

    model_config = _CAMEL

    label_selector: dict[str, str] | None = None
    service: str | None = None
    namespace: str = ""
    port_mappings: list[PortMapping] = Field(default_factory=list)

    @model_validator(mode="after")
    def _selector_xor_service(self) -> ForwardingRule:
        if self.service and self.label_selector:
            msg = "a port forwarding rule cannot define both labelSelector and service"
            raise ValueError(msg)
        return self

    @property
    def target(self) -> RuleTarget:
        if self.service:
            return ByService(self.service)
        return BySelector(dict(self.label_selector or {}))

    @property
    def effective_selector(self) -> dict[str, str]:
        """The rule's selector, or ``{}`` when it is bound by service."""
        return dict(self.label_selector or {})

    @classmethod
    def for_target(
        cls,
        target: RuleTarget,
        *,
        namespace: str,
        port_mappings: list[PortMapping],
    ) -> ForwardingRule:
        if isinstance(target, ByService):
            return cls(service=target.name, namespace=namespace, port_mappings=port_mappings)
        return cls(
            label_selector=dict(target.selector),
            namespace=namespace,
            port_mappings=port_mappings,
        )


# --- dev.selectors ---


class SelectorConfig(BaseModel):
    """A named selector (a "service") under ``dev.selectors``."""

    model_config = _CAMEL

    name: str
    label_selector: dict[str, str] = Field(default_factory=dict)
    namespace: str | None = None
    container_name: str | None = None


# --- deployments ---


class HelmConfig(BaseModel):
    """``helm`` block of a deployment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    chart: dict[str, Any] | None = None
    values: dict[str, Any] | None = None


class KubectlConfig(BaseModel):
    """``kubectl`` block of a deployment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    manifests: list[str] | None = None


class DeploymentConfig(BaseModel):
    """An entry of ``deployments``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str | None = None
    namespace: str | None = None
    helm: HelmConfig | None = None
    kubectl: KubectlConfig | None = None


# --- root ---


class DevConfig(BaseModel):
    """``dev`` section."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    ports: list[ForwardingRule] | None = None
    selectors: list[SelectorConfig] | None = None


class Config(BaseModel):
    """Root of ``devctl.yaml``.

    Mutable on purpose: operations edit the loaded instance in place and
    the store persists it afterwards.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    version: str = CONFIG_VERSION
    deployments: list[DeploymentConfig] | None = None
    dev: DevConfig = Field(default_factory=DevConfig)
