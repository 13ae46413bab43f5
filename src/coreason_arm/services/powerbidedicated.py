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
Microsoft.PowerBIDedicated management operations (API version 2017-10-01).
"""

from typing import Any

from coreason_arm.client import ArmClient
from coreason_arm.dispatcher import NO_CONTENT, Operation, OperationDispatcher
from coreason_arm.models import OperationResponse

API_VERSION = "2017-10-01"

_CAPACITY = (
    "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
    "/providers/Microsoft.PowerBIDedicated/capacities/{dedicatedCapacityName}"
)

GET_DETAILS = Operation(operation_id="Capacities_GetDetails", method="GET", path=_CAPACITY, responses={200: Any})
CREATE = Operation(
    operation_id="Capacities_Create",
    method="PUT",
    path=_CAPACITY,
    responses={200: Any, 201: Any},
)
UPDATE = Operation(
    operation_id="Capacities_Update",
    method="PATCH",
    path=_CAPACITY,
    responses={200: Any, 202: Any},
)
DELETE = Operation(
    operation_id="Capacities_Delete",
    method="DELETE",
    path=_CAPACITY,
    responses={200: NO_CONTENT, 202: NO_CONTENT, 204: NO_CONTENT},
)
SUSPEND = Operation(
    operation_id="Capacities_Suspend",
    method="POST",
    path=_CAPACITY + "/suspend",
    responses={200: NO_CONTENT, 202: NO_CONTENT},
)
RESUME = Operation(
    operation_id="Capacities_Resume",
    method="POST",
    path=_CAPACITY + "/resume",
    responses={200: NO_CONTENT, 202: NO_CONTENT},
)
LIST_BY_RESOURCE_GROUP = Operation(
    operation_id="Capacities_ListByResourceGroup",
    method="GET",
    path=(
        "/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
        "/providers/Microsoft.PowerBIDedicated/capacities"
    ),
    responses={200: Any},
)
LIST = Operation(
    operation_id="Capacities_List",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.PowerBIDedicated/capacities",
    responses={200: Any},
)
LIST_SKUS = Operation(
    operation_id="Capacities_ListSkus",
    method="GET",
    path="/subscriptions/{subscriptionId}/providers/Microsoft.PowerBIDedicated/skus",
    responses={200: Any},
)
LIST_SKUS_FOR_CAPACITY = Operation(
    operation_id="Capacities_ListSkusForCapacity",
    method="GET",
    path=_CAPACITY + "/skus",
    responses={200: Any},
)
CHECK_NAME_AVAILABILITY = Operation(
    operation_id="Capacities_CheckNameAvailability",
    method="POST",
    path=(
        "/subscriptions/{subscriptionId}"
        "/providers/Microsoft.PowerBIDedicated/locations/{location}/checkNameAvailability"
    ),
    responses={200: Any},
)
OPERATIONS_LIST = Operation(
    operation_id="Operations_List",
    method="GET",
    path="/providers/Microsoft.PowerBIDedicated/operations",
    responses={200: Any},
    default_error=True,
)


class CapacitiesOperations:
    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    @staticmethod
    def _capacity(subscription_id: str, resource_group_name: str, dedicated_capacity_name: str) -> dict[str, str]:
        return {
            "subscriptionId": subscription_id,
            "resourceGroupName": resource_group_name,
            "dedicatedCapacityName": dedicated_capacity_name,
        }

    async def get_details(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            GET_DETAILS, self._capacity(subscription_id, resource_group_name, dedicated_capacity_name)
        )

    async def create(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str, capacity_parameters: Any
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            CREATE,
            self._capacity(subscription_id, resource_group_name, dedicated_capacity_name),
            body=capacity_parameters,
        )

    async def update(
        self,
        subscription_id: str,
        resource_group_name: str,
        dedicated_capacity_name: str,
        capacity_update_parameters: Any,
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            UPDATE,
            self._capacity(subscription_id, resource_group_name, dedicated_capacity_name),
            body=capacity_update_parameters,
        )

    async def delete(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            DELETE, self._capacity(subscription_id, resource_group_name, dedicated_capacity_name)
        )

    async def suspend(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            SUSPEND, self._capacity(subscription_id, resource_group_name, dedicated_capacity_name)
        )

    async def resume(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            RESUME, self._capacity(subscription_id, resource_group_name, dedicated_capacity_name)
        )

    async def list_by_resource_group(self, subscription_id: str, resource_group_name: str) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_BY_RESOURCE_GROUP,
            {"subscriptionId": subscription_id, "resourceGroupName": resource_group_name},
        )

    async def list(self, subscription_id: str) -> OperationResponse:
        return await self._dispatcher.dispatch(LIST, {"subscriptionId": subscription_id})

    async def list_skus(self, subscription_id: str) -> OperationResponse:
        return await self._dispatcher.dispatch(LIST_SKUS, {"subscriptionId": subscription_id})

    async def list_skus_for_capacity(
        self, subscription_id: str, resource_group_name: str, dedicated_capacity_name: str
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            LIST_SKUS_FOR_CAPACITY, self._capacity(subscription_id, resource_group_name, dedicated_capacity_name)
        )

    async def check_name_availability(
        self, subscription_id: str, location: str, capacity_parameters: Any
    ) -> OperationResponse:
        return await self._dispatcher.dispatch(
            CHECK_NAME_AVAILABILITY,
            {"subscriptionId": subscription_id, "location": location},
            body=capacity_parameters,
        )


class PowerBIDedicatedOperations:
    """
    Lists the provider's REST operations. Failures decode the service's ErrorResponse.
    """

    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self) -> OperationResponse:
        return await self._dispatcher.dispatch(OPERATIONS_LIST)


class PowerBIDedicatedManagementClient(ArmClient):
    """
    Client for the Microsoft.PowerBIDedicated resource provider.
    """

    API_VERSION = API_VERSION

    @property
    def capacities(self) -> CapacitiesOperations:
        return CapacitiesOperations(self.dispatcher)

    @property
    def operations(self) -> PowerBIDedicatedOperations:
        return PowerBIDedicatedOperations(self.dispatcher)
