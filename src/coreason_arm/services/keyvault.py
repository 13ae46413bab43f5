# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_arm

"""
Microsoft.KeyVault management operations (API version 2016-10-01).
"""

from typing import Any

from coreason_arm.client import ArmClient
from coreason_arm.dispatcher import NO_CONTENT, Operation, OperationDispatcher
from coreason_arm.models import OperationResponse

API_VERSION = "2016-10-01"

_VAULT = (
    "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
    "/providers/Microsoft.KeyVault/vaults/{vaultName}"
)
_DELETED_VAULT = (
    "/subscriptions/{subscriptionId}/providers/Microsoft.KeyVault"
    "/locations/{location}/deletedVaults/{vaultName}"
)

GET = Operation(operation_id="Vaults_Get", method="GET", path=_VAULT, responses={200: Any})
CREATE_OR_UPDATE = Operation(
    operation_id="Vaults_CreateOrUpdate", method="PUT", path=_VAULT, responses={200: Any, 201: Any}
)
UPDATE = Operation(operation_id="Vaults_Update", method="PATCH", path=_VAULT, responses={200: Any, 201: Any})
DELETE = Operation(
    operation_id="Vaults_Delete", method="DELETE", path=_VAULT, responses={200: NO_CONTENT, 204: NO_CONTENT}
)
UPDATE_ACCESS_POLICY = Operation(
    operation_id="Vaults_UpdateAccessPolicy",
    method="PUT",
    path=_VAULT + "/accessPolicies/{operationKind}",
    responses={200: Any, 201: Any},
)
LIST_BY_RESOURCE_GROUP = Operation(
    operation_id="Vaults_ListByResourceGroup",
    method="GET",
    path="/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}/providers/Microsoft.KeyVault/vaults",
    responses={200: Any},
)
LIST_BY_SUBSCRIPTION = Operation(
    operation_id="Vaults_ListBySubscription",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.KeyVault/vaults",
    responses={200: Any},
)
LIST_DELETED = Operation(
    operation_id="Vaults_ListDeleted",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.KeyVault/deletedVaults",
    responses={200: Any},
)
GET_DELETED = Operation(operation_id="Vaults_GetDeleted", method="GET", path=_DELETED_VAULT, responses={200: Any})
PURGE_DELETED = Operation(
    operation_id="Vaults_PurgeDeleted",
    method="POST",
    path=_DELETED_VAULT + "/purge",
    responses={200: NO_CONTENT, 202: NO_CONTENT},
)
LIST = Operation(
    operation_id="Vaults_List",
    method="GET",
    path="/subscriptions/{subscriptionId}/resources",
    responses={200: Any},
)
CHECK_NAME_AVAILABILITY = Operation(
    operation_id="Vaults_CheckNameAvailability",
    method="POST",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.KeyVault/checkNameAvailability",
    responses={200: Any},
)
OPERATIONS_LIST = Operation(
    operation_id="Operations_List",
    method="GET",
    path="/providers/Microsoft.KeyVault/operations",
    responses={200: Any},
)

# Vaults_List always filters on the vault resource type.
VAULT_RESOURCE_FILTER = "resourceType eq 'Microsoft.KeyVault/vaults'"


class VaultsOperations:
    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    @staticmethod
    def _vault(subscription_id: str, resource_group_name: str, vault_name: str) -> dict[str, str]:
        return {
            "subscriptionId": subscription_id,
            "resourceGroupName": resource_group_name,
            "vaultName": vault_name,
        }

    async def get(self, subscription_id: str, resource_group_name: str, vault_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(GET, self._vault(subscription_id, resource_group_name, vault_name))

    async def create_or_update(
        self, subscription_id: str, resource_group_name: str, vault_name: str, parameters: Any
    ) -> OperationResponse:
        """
        Creates or updates a vault. 201 means created, 200 means an existing vault was updated.
        """
        return await self._dispatcher.dispatch(
            CREATE_OR_UPDATE, self._vault(subscription_id, resource_group_name, vault_name), body=parameters
        )

    async def update(
        self, subscription_id: str, resource_group_name: str, vault_name: str, parameters: Any
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            UPDATE, self._vault(subscription_id, resource_group_name, vault_name), body=parameters
        )

    async def delete(self, subscription_id: str, resource_group_name: str, vault_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(DELETE, self._vault(subscription_id, resource_group_name, vault_name))

    async def update_access_policy(
        self,
        subscription_id: str,
        resource_group_name: str,
        vault_name: str,
        operation_kind: str,
        parameters: Any,
    ) -> OperationResponse:
        """
        Adds, replaces or removes access policies. `operation_kind` is "add", "replace" or "remove".
        """
        path_params = self._vault(subscription_id, resource_group_name, vault_name)
        path_params["operationKind"] = operation_kind
        return await self._dispatcher.dispatch(UPDATE_ACCESS_POLICY, path_params, body=parameters)

    async def list_by_resource_group(
        self, subscription_id: str, resource_group_name: str, top: int | None = None
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_BY_RESOURCE_GROUP,
            {"subscriptionId": subscription_id, "resourceGroupName": resource_group_name},
            query=[("$top", top)],
        )

    async def list_by_subscription(self, subscription_id: str, top: int | None = None) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_BY_SUBSCRIPTION, {"subscriptionId": subscription_id}, query=[("$top", top)]
        )

    async def list_deleted(self, subscription_id: str) -> OperationResponse:
        return await self._dispatcher.dispatch(LIST_DELETED, {"subscriptionId": subscription_id})

    async def get_deleted(self, subscription_id: str, location: str, vault_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            GET_DELETED, {"subscriptionId": subscription_id, "location": location, "vaultName": vault_name}
        )

    async def purge_deleted(self, subscription_id: str, location: str, vault_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            PURGE_DELETED, {"subscriptionId": subscription_id, "location": location, "vaultName": vault_name}
        )

    async def list(
        self, subscription_id: str, top: int | None = None, filter: str = VAULT_RESOURCE_FILTER
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST, {"subscriptionId": subscription_id}, query=[("$filter", filter), ("$top", top)]
        )

    async def check_name_availability(self, subscription_id: str, vault_name: Any) -> OperationResponse:
        return await self._dispatcher.dispatch(
            CHECK_NAME_AVAILABILITY, {"subscriptionId": subscription_id}, body=vault_name
        )


class KeyVaultOperations:
    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self) -> OperationResponse:
        return await self._dispatcher.dispatch(OPERATIONS_LIST)


class KeyVaultManagementClient(ArmClient):
    """
    Client for the Microsoft.KeyVault resource provider.
    """

    API_VERSION = API_VERSION

    @property
    def vaults(self) -> VaultsOperations:
        return VaultsOperations(self.dispatcher)

    @property
    def operations(self) -> KeyVaultOperations:
        return KeyVaultOperations(self.dispatcher)
