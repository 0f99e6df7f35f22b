"""Environment-variable expansion for templated target fields.

References use shell syntax: ``$NAME`` or ``${NAME}``. Names are made of
letters, digits and underscores; the braced form additionally accepts dots
(``${build.number}``). ``$$`` renders a single ``$``.

A reference whose name is not in the environment is left untouched, so
``"v${MISSING}"`` resolves to ``"v${MISSING}"``.
"""

from __future__ import annotations

from collections.abc import Mapping
from string import Template

from .target import NotificationTarget, ResolvedTarget


class EnvironmentTemplate(Template):
    """``string.Template`` accepting build-system variable names."""

    idpattern = r"[A-Za-z0-9_]+"
    braceidpattern = r"[A-Za-z0-9_.]+"


def resolve(template_value: str | None, env: Mapping[str, str]) -> str:
    """Expand variable references in ``template_value``. Never raises."""
    if not template_value:
        return ""
    if "$" not in template_value:
        return template_value
    return EnvironmentTemplate(template_value).safe_substitute(env)


def resolve_target(target: NotificationTarget, env: Mapping[str, str]) -> ResolvedTarget:
    """Resolve every templated field of ``target`` against ``env``."""
    return ResolvedTarget(
        api_key_id=target.api_key_id,
        application_id=target.application_id,
        entity_guid=resolve(target.entity_guid, env),
        description=resolve(target.description, env),
        revision=resolve(target.revision, env),
        changelog=resolve(target.changelog, env),
        user=resolve(target.user, env),
        commit=resolve(target.commit, env),
        deeplink=resolve(target.deeplink, env),
        deployment_type=resolve(target.deployment_type, env),
        group_id=resolve(target.group_id, env),
        timestamp=resolve(target.timestamp, env),
        version=resolve(target.version, env),
        european=target.european,
    )
