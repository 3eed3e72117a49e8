"""Acting administrator as resolved by the auth collaborator."""

from pydantic import BaseModel


class Actor(BaseModel):
    """
    Identity and company scope of the caller.

    company_ids of None means the actor may act on every company.
    """

    actor_id: str | None = None
    company_ids: frozenset[int] | None = None

    def can_act_on(self, company_id: int) -> bool:
        if self.company_ids is None:
            return True
        return company_id in self.company_ids
