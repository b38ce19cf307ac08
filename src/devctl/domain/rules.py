"""Forwarding rule matching, merging, and removal.

Pure functions over ``dev.ports``.  Nothing here touches the filesystem;
the service layer decides when the result is persisted.

INVARIANT: two rules never target the same selector.  New mappings for
an already-forwarded selector are appended to that rule instead.
Matching is exact selector equality: ``{app: a}`` and
``{app: a, tier: web}`` are different targets.
"""

from __future__ import annotations

from dataclasses import dataclass

from devctl.config.models import (
    BySelector,
    ByService,
    Config,
    ForwardingRule,
    PortMapping,
    RuleTarget,
    SelectorConfig,
)
from devctl.domain.ports import contains_port
from devctl.domain.selectors import selectors_equal

DEFAULT_RELEASE_NAME = "devspace"


@dataclass(frozen=True)
class MergeOutcome:
    """Which rule received the mappings and whether it already existed."""

    index: int
    rule: ForwardingRule
    merged: bool


@dataclass(frozen=True)
class RemovalOutcome:
    rules: list[ForwardingRule]
    removed_rules: int
    removed_mappings: int


def find_rule(rules: list[ForwardingRule], selector: dict[str, str]) -> int | None:
    """Index of the first rule whose effective selector equals *selector*."""
    for index, rule in enumerate(rules):
        if selectors_equal(rule.effective_selector, selector):
            return index
    return None


def insert_or_replace(
    rules: list[ForwardingRule],
    namespace: str,
    selector: dict[str, str],
    service_name: str,
    mappings: list[PortMapping],
) -> MergeOutcome:
    """Merge *mappings* into the matching rule, or append a new rule.

    A matching rule keeps its own namespace and service.  A new rule is
    bound to *service_name* when one is given (its selector is dropped),
    otherwise to *selector*.  *rules* is modified in place.
    """
    index = find_rule(rules, selector)
    if index is not None:
        rule = rules[index]
        rule.port_mappings = [*rule.port_mappings, *mappings]
        return MergeOutcome(index=index, rule=rule, merged=True)

    target: RuleTarget = ByService(service_name) if service_name else BySelector(selector)
    rule = ForwardingRule.for_target(target, namespace=namespace, port_mappings=list(mappings))
    rules.append(rule)
    return MergeOutcome(index=len(rules) - 1, rule=rule, merged=False)


def remove_ports(
    rules: list[ForwardingRule],
    *,
    remove_all: bool,
    ports: list[str],
) -> RemovalOutcome:
    """Drop mappings whose local or remote port is listed in *ports*.

    With *remove_all* every rule is dropped.  A rule left without
    mappings is dropped too; surviving rules keep their order.
    """
    kept: list[ForwardingRule] = []
    removed_mappings = 0

    for rule in rules:
        if remove_all:
            removed_mappings += len(rule.port_mappings)
            continue

        surviving = [
            pm
            for pm in rule.port_mappings
            if not (contains_port(pm.local_port, ports) or contains_port(pm.remote_port, ports))
        ]
        removed_mappings += len(rule.port_mappings) - len(surviving)
        if surviving:
            rule.port_mappings = surviving
            kept.append(rule)

    return RemovalOutcome(
        rules=kept,
        removed_rules=len(rules) - len(kept),
        removed_mappings=removed_mappings,
    )


def find_selector(selectors: list[SelectorConfig], name: str) -> SelectorConfig | None:
    for selector in selectors:
        if selector.name == name:
            return selector
    return None


def first_helm_deployment_name(config: Config) -> str:
    """Name of the first helm deployment, falling back to ``devspace``."""
    for deployment in config.deployments or []:
        if deployment.helm is not None and deployment.name:
            return deployment.name
    return DEFAULT_RELEASE_NAME
