"""PortService — add, remove, and list port forwarding rules.

Pipeline for mutations: VALIDATE → RESOLVE → PARSE → APPLY → SAVE.
Everything up to APPLY happens before the in-memory config changes; a
failed SAVE leaves the in-memory edit in place (the process exits right
after, so nothing reuses it).
"""

from __future__ import annotations

import logging
from typing import Any

from devctl.config.models import Config, ForwardingRule
from devctl.domain.errors import ConfigError, NotFoundError, ValidationError
from devctl.domain.ports import parse_port_mappings, port_tokens
from devctl.domain.rules import (
    find_selector,
    first_helm_deployment_name,
    insert_or_replace,
    remove_ports,
)
from devctl.domain.selectors import format_selectors, parse_selectors
from devctl.services.base import BaseService
from devctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

_SAVE_PREFIX = "Couldn't save config file: "


class PortService(BaseService):
    """Edits ``dev.ports`` of the loaded config."""

    # ------------------------------------------------------------------
    # add
    # ------------------------------------------------------------------

    def add_port(
        self,
        port_mappings: str,
        *,
        namespace: str = "",
        label_selector: str = "",
        service_name: str = "",
    ) -> ServiceResult:
        """Forward *port_mappings* for a selector or a named service.

        Without *label_selector* the target is resolved from the config:
        the named (or first) entry of ``dev.selectors``, else
        ``release=<first helm deployment>``.
        """
        op = "add_port"

        # ── VALIDATE ─────────────────────────────────────────
        if label_selector and service_name:
            return self._fail(
                op,
                ValidationError(
                    "both service and label-selector specified. This is illegal because "
                    "the label-selector is already specified in the referenced service. "
                    "Therefore defining both is redundant",
                    service=service_name,
                    label_selector=label_selector,
                ),
            )

        try:
            config = self._store.get_base_config()
        except ConfigError as exc:
            return self._fail(op, exc)

        # ── RESOLVE ──────────────────────────────────────────
        selector: dict[str, str] | None = None
        if not label_selector:
            try:
                selector, label_selector = self._resolve_default_target(config, service_name)
            except NotFoundError as exc:
                return self._fail(op, exc)

        # ── PARSE ────────────────────────────────────────────
        if selector is None:
            try:
                selector = parse_selectors(label_selector)
            except ConfigError as exc:
                return self._fail(op, exc, prefix="Error parsing selectors: ")

        try:
            mappings = parse_port_mappings(port_mappings)
        except ConfigError as exc:
            return self._fail(op, exc, prefix="Error parsing port mappings: ")

        # ── APPLY ────────────────────────────────────────────
        if config.dev.ports is None:
            config.dev.ports = []
        outcome = insert_or_replace(config.dev.ports, namespace, selector, service_name, mappings)
        logger.debug(
            "%s rule %d (%s)",
            "Merged into" if outcome.merged else "Created",
            outcome.index,
            _describe_target(outcome.rule),
        )

        # ── SAVE ─────────────────────────────────────────────
        try:
            self._store.save_loaded_config()
        except ConfigError as exc:
            return self._fail(op, exc, prefix=_SAVE_PREFIX)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "namespace": outcome.rule.namespace,
                "selector": format_selectors(outcome.rule.label_selector),
                "service": outcome.rule.service or "",
                "added": [pm.model_dump() for pm in mappings],
                "merged": outcome.merged,
                "rule_index": outcome.index,
                "rules": len(config.dev.ports),
            },
        )

    # ------------------------------------------------------------------
    # remove
    # ------------------------------------------------------------------

    def remove_port(
        self,
        ports: str | None = None,
        *,
        remove_all: bool = False,
        label_selector: str = "",
    ) -> ServiceResult:
        """Remove forwarded ports, or every rule with *remove_all*.

        A mapping is removed when its local or remote port is listed in
        *ports*.  Rules left without mappings are dropped.  The selector
        only counts towards "something was specified"; it does not narrow
        which rules are filtered.
        """
        op = "remove_port"

        try:
            selector = parse_selectors(label_selector)
        except ConfigError as exc:
            return self._fail(op, exc, prefix="Error parsing selectors: ")

        if not selector and not remove_all and not ports:
            return self._fail(
                op, ValidationError("You have to specify at least one of the supported flags")
            )

        try:
            config = self._store.get_base_config()
        except ConfigError as exc:
            return self._fail(op, exc)

        existing = config.dev.ports
        if not existing:
            logger.debug("No port forwarding rules configured, nothing to remove")
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "removed_rules": 0,
                    "removed_mappings": 0,
                    "remaining_rules": 0,
                    "saved": False,
                },
            )

        outcome = remove_ports(existing, remove_all=remove_all, ports=port_tokens(ports))
        config.dev.ports = outcome.rules
        logger.debug(
            "Removed %d mapping(s) and %d rule(s)", outcome.removed_mappings, outcome.removed_rules
        )

        try:
            self._store.save_loaded_config()
        except ConfigError as exc:
            return self._fail(op, exc, prefix=_SAVE_PREFIX)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "removed_rules": outcome.removed_rules,
                "removed_mappings": outcome.removed_mappings,
                "remaining_rules": len(outcome.rules),
                "saved": True,
            },
        )

    # ------------------------------------------------------------------
    # list
    # ------------------------------------------------------------------

    def list_ports(self) -> ServiceResult:
        """List configured rules in order. Read-only."""
        op = "list_ports"
        try:
            config = self._store.get_base_config()
        except ConfigError as exc:
            return self._fail(op, exc)

        items: list[dict[str, Any]] = [
            {
                "index": index,
                "selector": format_selectors(rule.label_selector),
                "service": rule.service or "",
                "namespace": rule.namespace,
                "mappings": [str(pm) for pm in rule.port_mappings],
            }
            for index, rule in enumerate(config.dev.ports or [])
        ]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_default_target(
        config: Config, service_name: str
    ) -> tuple[dict[str, str] | None, str]:
        """Return ``(pre-parsed selector, selector text)``; one of them is set.

        Raises:
            NotFoundError: If *service_name* is not in ``dev.selectors``.
        """
        selectors = config.dev.selectors
        if selectors:
            if service_name:
                entry = find_selector(selectors, service_name)
                if entry is None:
                    raise NotFoundError(
                        f"no service with name {service_name} exists", service=service_name
                    )
            else:
                entry = selectors[0]
            return dict(entry.label_selector), ""

        return None, f"release={first_helm_deployment_name(config)}"


def _describe_target(rule: ForwardingRule) -> str:
    if rule.service:
        return f"service={rule.service}"
    return format_selectors(rule.label_selector) or "<all pods>"
