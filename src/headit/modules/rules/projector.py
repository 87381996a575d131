"""Projection of the rule set onto the per-host header map the service needs."""

from collections.abc import Iterable

from headit.modules.rules.models import Rule

Projection = dict[str, dict[str, str]]


def project(
    rules: Iterable[Rule],
    host_filter: str | None = None,
    force_hosts: Iterable[str] = (),
) -> Projection:
    """
    Map host -> header name -> value for the enabled rules.

    Later rules overwrite earlier ones with the same (host, key).  Hosts without
    enabled rules are left out, except the ones in ``force_hosts``, which are
    kept with an empty map so the service clears them.

    Args:
        rules: Rules in RuleSet order
        host_filter: Only project this host when given
        force_hosts: Hosts to include even when they have nothing enabled

    Returns:
        Projection dict, hosts in first-seen order
    """
    result: Projection = {}
    for rule in rules:
        if not rule.enabled or rule.is_inert:
            continue
        if host_filter is not None and rule.host != host_filter:
            continue
        result.setdefault(rule.host, {})[rule.key] = rule.value

    for host in force_hosts:
        if host_filter is not None and host != host_filter:
            continue
        result.setdefault(host, {})
    return result


def hosts_of(rules: Iterable[Rule]) -> set[str]:
    """Return every host that has at least one rule, enabled or not."""
    return {rule.host for rule in rules}
