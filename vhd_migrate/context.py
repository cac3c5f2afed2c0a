"""Resolve and validate the source and target of a migration."""

from __future__ import annotations

import logging

from vhd_migrate.errors import ResourceGroupNotFoundError, SubscriptionNotFoundError
from vhd_migrate.infrastructure.azure_context import AzureContext
from vhd_migrate.models import MigrationPlan, VMReference

logger = logging.getLogger(__name__)


def resolve_context(
    ctx: AzureContext,
    source_subscription: str,
    resource_group: str,
    vm_name: str,
    target_subscription: str | None = None,
    target_resource_group: str | None = None,
) -> MigrationPlan:
    """Validate subscriptions and resource groups and build the plan.

    Leaves the source subscription active.

    Raises:
        SubscriptionNotFoundError: If the source or the given target
            subscription is not visible to the credential.
        ResourceGroupNotFoundError: If the source resource group is missing.
    """
    # lowercased ID -> ID as listed by Azure
    subscriptions = {sub.lower(): sub for sub in ctx.list_subscription_ids()}
    if source_subscription.lower() not in subscriptions:
        raise SubscriptionNotFoundError(source_subscription)
    source_subscription = subscriptions[source_subscription.lower()]
    if target_subscription:
        if target_subscription.lower() not in subscriptions:
            raise SubscriptionNotFoundError(target_subscription)
        target_subscription = subscriptions[target_subscription.lower()]

    ctx.activate(source_subscription)
    logger.info(f"Using source subscription {source_subscription}")

    if not ctx.resource_group_exists(resource_group):
        raise ResourceGroupNotFoundError(resource_group, source_subscription)

    plan = MigrationPlan(
        source=VMReference(source_subscription, resource_group, vm_name),
        target_subscription_id=target_subscription or source_subscription,
        target_resource_group=target_resource_group or resource_group,
    )

    if plan.target_resource_group == resource_group and not plan.cross_subscription:
        return plan

    if plan.cross_subscription:
        if not ctx.resource_group_exists(
            plan.target_resource_group, plan.target_subscription_id
        ):
            logger.warning(
                f"Resource group {plan.target_resource_group} not found in "
                f"subscription {plan.target_subscription_id}, it will be created"
            )
            plan.create_target_group = True
    elif not ctx.resource_group_exists(plan.target_resource_group):
        logger.warning(
            f"Resource group {plan.target_resource_group} not found, "
            f"falling back to source resource group {resource_group}"
        )
        plan.target_resource_group = resource_group

    return plan
