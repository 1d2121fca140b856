"""View selection and filter state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pymonitoreo._constants import GROUP_ENTITIES, Group, View


def _default_entities() -> dict[Group, str]:
    return {group: entities[0] for group, entities in GROUP_ENTITIES.items()}


class FilterState(BaseModel):
    """Control values that constrain a view; ``""`` means no constraint."""

    model_config = ConfigDict(frozen=True)

    event_type: str = ""
    authorized: str = ""
    search: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.event_type or self.authorized or self.search)


class ViewState(BaseModel):
    """Active view, selected entity per group and the auto-refresh toggle."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    active_view: View = View.DASHBOARD
    active_entity: dict[Group, str] = Field(default_factory=_default_entities)
    auto_refresh: bool = True

    def entity_for(self, group: Group) -> str:
        return self.active_entity.get(group, GROUP_ENTITIES[group][0])
