"""Company lookup with the acting administrator's scope applied."""

from kycgate.core.entities.actor import Actor
from kycgate.core.entities.company import CompanyProfile
from kycgate.core.exceptions import CompanyNotFoundError, ForbiddenError
from kycgate.core.interfaces.storage import ICompanyStore


def ensure_can_act(actor: Actor | None, company_id: int) -> None:
    """Raise ForbiddenError if the actor is scoped away from company_id."""
    if actor is not None and not actor.can_act_on(company_id):
        raise ForbiddenError(company_id, actor.actor_id)


async def load_company(
    store: ICompanyStore,
    company_id: int,
    actor: Actor | None = None,
) -> CompanyProfile:
    """
    Fetch a company the actor may act on.

    Scope is checked before existence so out-of-scope ids cannot be probed.
    """
    ensure_can_act(actor, company_id)
    company = await store.get(company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company
