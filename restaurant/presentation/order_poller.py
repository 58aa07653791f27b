import asyncio
import inspect
import json
import logging
from typing import Any, Callable, Optional

import httpx

from restaurant.config import settings

logger = logging.getLogger(__name__)

# Сигнатура состояния "заказов нет"
_EMPTY_SIGNATURE = ""


async def _maybe_await(result):
    if inspect.isawaitable(result):
        await result


class _Poller:
    """Периодический опрос API с перерисовкой только при изменении ответа.

    Один таймер на экземпляр: повторный start() отменяет предыдущий цикл.
    Ошибки загрузки передаются в notify, следующий тик просто пробует снова.
    """

    def __init__(
        self,
        render: Callable[[Any], Any],
        notify: Optional[Callable[[str], Any]] = None,
        base_url: Optional[str] = None,
        interval: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self._base_url = (base_url or settings.SERVICE_URL).rstrip("/")
        self._render = render
        self._notify = notify
        self._interval = interval if interval is not None else settings.ORDER_POLL_INTERVAL_SECONDS
        self._client = client
        self._task: Optional[asyncio.Task] = None
        self._last_signature: Optional[str] = None

    @property
    def path(self) -> str:
        raise NotImplementedError

    @property
    def error_message(self) -> str:
        return "Ошибка загрузки данных"

    def extract(self, payload):
        """Данные для отрисовки; None означает пустое состояние.

        ValueError для ответа неожиданной формы.
        """
        return payload

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is not None:
            self._task.cancel()
        self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self):
        while True:
            try:
                await self.poll_once()
            except Exception:
                # Ошибка отрисовки не должна останавливать опрос
                logger.exception(f"Ошибка обработки тика опроса {self.path}")
            await asyncio.sleep(self._interval)

    async def _get(self, url: str) -> httpx.Response:
        headers = {"Cache-Control": "no-store"}
        if self._client is not None:
            return await self._client.get(url, headers=headers, timeout=10.0)
        async with httpx.AsyncClient() as client:
            return await client.get(url, headers=headers, timeout=10.0)

    async def poll_once(self) -> bool:
        """Один тик опроса. Возвращает True, если была перерисовка."""
        url = f"{self._base_url}{self.path}"
        try:
            response = await self._get(url)
            response.raise_for_status()
            data = self.extract(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Ошибка опроса {url}: {e}")
            if self._notify is not None:
                await _maybe_await(self._notify(self.error_message))
            return False

        signature = _EMPTY_SIGNATURE if data is None else json.dumps(data, sort_keys=True)
        if signature == self._last_signature:
            return False

        self._last_signature = signature
        await _maybe_await(self._render(data))
        return True


class OrderPoller(_Poller):
    """Опрос последнего заказа клиента"""

    def __init__(self, customer_id: int, render, notify=None, base_url=None, interval=None, client=None):
        super().__init__(render, notify, base_url, interval, client)
        self._customer_id = customer_id

    @property
    def path(self) -> str:
        return f"/api/orders/customers/{self._customer_id}/pending-orders"

    @property
    def error_message(self) -> str:
        return "Ошибка загрузки заказов"

    def extract(self, payload):
        if not isinstance(payload, dict):
            raise ValueError(f"Ожидался объект заказа, получено: {payload!r}")
        # Заглушка без позиций означает, что заказов нет
        if not payload.get("items"):
            return None
        return payload


class OrderCountPoller(_Poller):
    """Опрос количества заказов в статусе, для бейджа персонала"""

    def __init__(self, status: str, render, notify=None, base_url=None, interval=None, client=None):
        super().__init__(render, notify, base_url, interval, client)
        self._status = status

    @property
    def path(self) -> str:
        return f"/api/orders/count?{httpx.QueryParams(status=self._status)}"

    @property
    def error_message(self) -> str:
        return "Ошибка загрузки количества заказов"

    def extract(self, payload):
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise ValueError(f"Ожидалось целое число, получено: {payload!r}")
        return payload
