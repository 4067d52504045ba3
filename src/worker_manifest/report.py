"""Fields a manifest copied from a template still needs filled in.

Templates ship with account, zone, route and namespace values that belong to
the template author. Before the first deploy a user must replace them, unless
the account or zone id is supplied through an override provider.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .models import KvNamespace, ManifestDocument
from .overrides import OverrideProvider


@dataclass
class PlaceholderReport:
    top_level: list[str] = field(default_factory=list)
    environments: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.top_level and not self.environments

    def lines(self) -> list[str]:
        out = [f"- {item}" for item in self.top_level]
        for env_name in sorted(self.environments):
            if out:
                out.append("")
            out.append(f"[env.{env_name}]")
            out.extend(f"  - {item}" for item in self.environments[env_name])
        return out


def _namespace_fields(namespaces: Optional[Sequence[KvNamespace]]) -> list[str]:
    return [f"kv-namespace {ns.binding} needs a namespace_id" for ns in namespaces or ()]


def placeholder_report(
    document: ManifestDocument, overrides: Optional[OverrideProvider] = None
) -> PlaceholderReport:
    supplied = overrides.overrides() if overrides is not None else {}
    account_supplied = "account_id" in supplied
    zone_supplied = "zone_id" in supplied

    report = PlaceholderReport()
    if not account_supplied:
        report.top_level.append("account_id")
    report.top_level.extend(_namespace_fields(document.kv_namespaces))
    if document.route:
        report.top_level.append("route")
    if document.zone_id and not zone_supplied:
        report.top_level.append("zone_id")

    for env_name, env in document.environments.items():
        fields: list[str] = []
        if env.account_id is not None and not account_supplied:
            fields.append("account_id")
        fields.extend(_namespace_fields(env.kv_namespaces))
        if env.route:
            fields.append("route")
        if env.zone_id and not zone_supplied:
            fields.append("zone_id")
        if fields:
            report.environments[env_name] = fields

    return report
