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
Microsoft.Storage management operations (API version 2016-01-01).
"""

from typing import Any

from coreason_arm.client import ArmClient
from coreason_arm.dispatcher import NO_CONTENT, Operation, OperationDispatcher
from coreason_arm.models import OperationResponse

API_VERSION = "2016-01-01"

_ACCOUNT = (
    "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
    "/providers/Microsoft.Storage/storageAccounts/{accountName}"
)

CHECK_NAME_AVAILABILITY = Operation(
    operation_id="StorageAccounts_CheckNameAvailability",
    method="POST",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.Storage/checkNameAvailability",
    responses={200: Any},
)
GET_PROPERTIES = Operation(
    operation_id="StorageAccounts_GetProperties", method="GET", path=_ACCOUNT, responses={200: Any}
)
CREATE = Operation(
    operation_id="StorageAccounts_Create", method="PUT", path=_ACCOUNT, responses={200: Any, 202: NO_CONTENT}
)
UPDATE = Operation(operation_id="StorageAccounts_Update", method="PATCH", path=_ACCOUNT, responses={200: Any})
DELETE = Operation(
    operation_id="StorageAccounts_Delete", method="DELETE", path=_ACCOUNT, responses={200: NO_CONTENT, 204: NO_CONTENT}
)
LIST = Operation(
    operation_id="StorageAccounts_List",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.Storage/storageAccounts",
    responses={200: Any},
)
LIST_BY_RESOURCE_GROUP = Operation(
    operation_id="StorageAccounts_ListByResourceGroup",
    method="GET",
    path=(
        "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
        "/providers/Microsoft.Storage/storageAccounts"
    ),
    responses={200: Any},
)
LIST_KEYS = Operation(
    operation_id="StorageAccounts_ListKeys", method="POST", path=_ACCOUNT + "/listKeys", responses={200: Any}
)
REGENERATE_KEY = Operation(
    operation_id="StorageAccounts_RegenerateKey", method="POST", path=_ACCOUNT + "/regenerateKey", responses={200: Any}
)
USAGE_LIST = Operation(
    operation_id="Usage_List",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.Storage/usages",
    responses={200: Any},
)


class StorageAccountsOperations:
    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    @staticmethod
    def _account(subscription_id: str, resource_group_name: str, account_name: str) -> dict[str, str]:
        return {
            "subscriptionId": subscription_id,
            "resourceGroupName": resource_group_name,
            "accountName": account_name,
        }

    async def check_name_availability(self, subscription_id: str, account_name: Any) -> OperationResponse:
        return await self._dispatcher.dispatch(
            CHECK_NAME_AVAILABILITY, {"subscriptionId": subscription_id}, body=account_name
        )

    async def get_properties(
        self, subscription_id: str, resource_group_name: str, account_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            GET_PROPERTIES, self._account(subscription_id, resource_group_name, account_name)
        )

    async def create(
        self, subscription_id: str, resource_group_name: str, account_name: str, parameters: Any
    ) -> OperationResponse:
        """
        Creates a storage account. 200 carries the account; 202 means creation was accepted.
        """
        return await self._dispatcher.dispatch(
            CREATE, self._account(subscription_id, resource_group_name, account_name), body=parameters
        )

    async def update(
        self, subscription_id: str, resource_group_name: str, account_name: str, parameters: Any
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            UPDATE, self._account(subscription_id, resource_group_name, account_name), body=parameters
        )

    async def delete(self, subscription_id: str, resource_group_name: str, account_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            DELETE, self._account(subscription_id, resource_group_name, account_name)
        )

    async def list(self, subscription_id: str) -> OperationResponse:
        return await self._dispatcher.dispatch(LIST, {"subscriptionId": subscription_id})

    async def list_by_resource_group(self, subscription_id: str, resource_group_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_BY_RESOURCE_GROUP,
            {"subscriptionId": subscription_id, "resourceGroupName": resource_group_name},
        )

    async def list_keys(self, subscription_id: str, resource_group_name: str, account_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_KEYS, self._account(subscription_id, resource_group_name, account_name)
        )

    async def regenerate_key(
        self, subscription_id: str, resource_group_name: str, account_name: str, regenerate_key: Any
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            REGENERATE_KEY, self._account(subscription_id, resource_group_name, account_name), body=regenerate_key
        )


class UsageOperations:
    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self, subscription_id: str) -> OperationResponse:
        return await self._dispatcher.dispatch(USAGE_LIST, {"subscriptionId": subscription_id})


class StorageManagementClient(ArmClient):
    """
    Client for the Microsoft.Storage resource provider.
    """

    API_VERSION = API_VERSION

    @property
    def storage_accounts(self) -> StorageAccountsOperations:
        return StorageAccountsOperations(self.dispatcher)

    @property
    def usage(self) -> UsageOperations:
        return UsageOperations(self.dispatcher)
