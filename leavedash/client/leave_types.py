from typing import List

import httpx

from leavedash.client.base import request_json
from leavedash.schemas import LeaveBalanceResponse, LeaveTypeResponse


async def get_leave_types(client: httpx.AsyncClient) -> List[LeaveTypeResponse]:
    data = await request_json(client, "GET", "/leave-types", action="fetch leave types")
    return [LeaveTypeResponse.model_validate(item) for item in data or []]


async def get_my_leave_balance(client: httpx.AsyncClient) -> LeaveBalanceResponse:
    data = await request_json(client, "GET", "/leave-balances/me", action="fetch leave balance")
    return LeaveBalanceResponse.model_validate(data)
