"""Tests for forwarding rule merge and removal."""

from __future__ import annotations

import pytest

from devctl.config.models import (
    BySelector,
    ByService,
    Config,
    DeploymentConfig,
    ForwardingRule,
    HelmConfig,
    KubectlConfig,
    PortMapping,
    SelectorConfig,
)
from devctl.domain.ports import port_tokens
from devctl.domain.rules import (
    find_rule,
    find_selector,
    first_helm_deployment_name,
    insert_or_replace,
    remove_ports,
)


def _pm(local: int, remote: int | None = None) -> PortMapping:
    return PortMapping(local_port=local, remote_port=local if remote is None else remote)


def _rule(selector: dict[str, str] | None, *ports: int, service: str | None = None) -> ForwardingRule:
    return ForwardingRule(
        label_selector=selector,
        service=service,
        port_mappings=[_pm(p) for p in ports],
    )


# ---------------------------------------------------------------------------
# insert_or_replace
# ---------------------------------------------------------------------------


class TestInsertOrReplace:
    def test_creates_rule_in_empty_list(self) -> None:
        rules: list[ForwardingRule] = []
        outcome = insert_or_replace(rules, "dev", {"app": "web"}, "", [_pm(80)])
        assert outcome.merged is False
        assert outcome.index == 0
        assert rules == [
            ForwardingRule(label_selector={"app": "web"}, namespace="dev", port_mappings=[_pm(80)])
        ]

    def test_merges_into_equal_selector(self) -> None:
        rules = [_rule({"app": "web", "tier": "fe"}, 80)]
        outcome = insert_or_replace(rules, "", {"tier": "fe", "app": "web"}, "", [_pm(443), _pm(80)])
        assert outcome.merged is True
        assert len(rules) == 1
        assert rules[0].port_mappings == [_pm(80), _pm(443), _pm(80)]

    def test_merge_keeps_existing_namespace_and_service(self) -> None:
        rules = [ForwardingRule(label_selector={"app": "web"}, namespace="prod", port_mappings=[_pm(80)])]
        insert_or_replace(rules, "other", {"app": "web"}, "", [_pm(81)])
        assert rules[0].namespace == "prod"
        assert rules[0].service is None

    def test_merges_into_first_match_only(self) -> None:
        rules = [_rule({"app": "a"}, 1), _rule({"app": "a"}, 2)]
        outcome = insert_or_replace(rules, "", {"app": "a"}, "", [_pm(3)])
        assert outcome.index == 0
        assert rules[0].port_mappings == [_pm(1), _pm(3)]
        assert rules[1].port_mappings == [_pm(2)]

    def test_superset_selector_creates_new_rule(self) -> None:
        rules = [_rule({"app": "a"}, 80)]
        outcome = insert_or_replace(rules, "", {"app": "a", "tier": "web"}, "", [_pm(90)])
        assert outcome.merged is False
        assert outcome.index == 1
        assert [r.label_selector for r in rules] == [{"app": "a"}, {"app": "a", "tier": "web"}]

    def test_new_rule_appended_after_existing(self) -> None:
        rules = [_rule({"app": "a"}, 80), _rule({"app": "b"}, 90)]
        insert_or_replace(rules, "", {"app": "c"}, "", [_pm(100)])
        assert [r.label_selector for r in rules] == [{"app": "a"}, {"app": "b"}, {"app": "c"}]

    def test_service_name_clears_selector(self) -> None:
        rules: list[ForwardingRule] = []
        outcome = insert_or_replace(rules, "data", {"app": "postgres"}, "database", [_pm(5432)])
        assert outcome.rule.service == "database"
        assert outcome.rule.label_selector is None
        assert outcome.rule.target == ByService("database")

    def test_service_rule_matches_empty_selector(self) -> None:
        rules = [_rule(None, 5432, service="database")]
        outcome = insert_or_replace(rules, "", {}, "", [_pm(5433)])
        assert outcome.merged is True
        assert rules[0].port_mappings == [_pm(5432), _pm(5433)]

    def test_does_not_alias_caller_selector(self) -> None:
        selector = {"app": "web"}
        rules: list[ForwardingRule] = []
        insert_or_replace(rules, "", selector, "", [_pm(80)])
        selector["app"] = "changed"
        assert rules[0].label_selector == {"app": "web"}


class TestFindRule:
    def test_none_when_no_match(self) -> None:
        assert find_rule([_rule({"app": "a"}, 80)], {"app": "b"}) is None

    def test_rule_without_selector_has_empty_effective_selector(self) -> None:
        assert find_rule([_rule(None, 80)], {}) == 0


# ---------------------------------------------------------------------------
# remove_ports
# ---------------------------------------------------------------------------


class TestRemovePorts:
    def test_drops_emptied_rule_and_keeps_others(self) -> None:
        second = _rule({"app": "b"}, 90)
        rules = [_rule({"app": "a"}, 80), second]
        outcome = remove_ports(rules, remove_all=False, ports=port_tokens("80"))
        assert outcome.rules == [second]
        assert outcome.rules[0].port_mappings == [_pm(90)]
        assert outcome.removed_rules == 1
        assert outcome.removed_mappings == 1

    def test_matches_remote_port(self) -> None:
        rules = [ForwardingRule(label_selector={"app": "a"}, port_mappings=[_pm(8080, 80), _pm(443)])]
        outcome = remove_ports(rules, remove_all=False, ports=port_tokens("80"))
        assert outcome.rules[0].port_mappings == [_pm(443)]

    def test_trims_tokens(self) -> None:
        rules = [_rule({"app": "a"}, 80, 443, 3000)]
        outcome = remove_ports(rules, remove_all=False, ports=port_tokens(" 80 , 3000"))
        assert outcome.rules[0].port_mappings == [_pm(443)]

    def test_remove_all_drops_every_rule(self) -> None:
        rules = [_rule({"app": "a"}, 80), _rule({"app": "b"}, 90, 91)]
        outcome = remove_ports(rules, remove_all=True, ports=port_tokens("12345"))
        assert outcome.rules == []
        assert outcome.removed_rules == 2
        assert outcome.removed_mappings == 3

    def test_no_matching_port_keeps_everything(self) -> None:
        rules = [_rule({"app": "a"}, 80), _rule({"app": "b"}, 90)]
        outcome = remove_ports(rules, remove_all=False, ports=port_tokens(None))
        assert outcome.rules == rules
        assert outcome.removed_rules == 0
        assert outcome.removed_mappings == 0


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestFindSelector:
    def test_by_name(self) -> None:
        entries = [
            SelectorConfig(name="web", label_selector={"app": "web"}),
            SelectorConfig(name="db", label_selector={"app": "db"}),
        ]
        assert find_selector(entries, "db") is entries[1]

    def test_missing(self) -> None:
        assert find_selector([SelectorConfig(name="web")], "db") is None


class TestFirstHelmDeploymentName:
    def test_first_helm_deployment(self) -> None:
        config = Config(
            deployments=[
                DeploymentConfig(name="manifests", kubectl=KubectlConfig(manifests=["k8s/*"])),
                DeploymentConfig(name="chart-a", helm=HelmConfig()),
                DeploymentConfig(name="chart-b", helm=HelmConfig()),
            ]
        )
        assert first_helm_deployment_name(config) == "chart-a"

    @pytest.mark.parametrize(
        "deployments",
        [None, [], [DeploymentConfig(name="manifests", kubectl=KubectlConfig())]],
    )
    def test_fallback(self, deployments: list[DeploymentConfig] | None) -> None:
        assert first_helm_deployment_name(Config(deployments=deployments)) == "devspace"


class TestRuleTarget:
    def test_selector_target(self) -> None:
        assert _rule({"app": "a"}, 80).target == BySelector({"app": "a"})

    def test_no_selector_target_is_empty_selector(self) -> None:
        assert _rule(None, 80).target == BySelector({})
