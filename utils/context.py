"""
Request Context - リクエスト単位のID・期限・キャンセル管理

トランスポート層で生成し、ディスパッチャー → ハンドラー → ストアへ渡す。
"""

import time
import uuid
from typing import Optional, Union

from errors import RequestCancelledError, RequestTimeoutError


class RequestContext:
    """1リクエストのライフサイクル"""

    def __init__(self, request_id: Optional[Union[int, str]] = None, timeout: Optional[float] = None):
        self.request_id = request_id if request_id is not None else uuid.uuid4().hex
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def remaining(self) -> Optional[float]:
        """期限までの残り秒数（期限なしは None）"""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        if self._cancelled:
            raise RequestCancelledError(f"request {self.request_id} was cancelled")
        if self.expired:
            raise RequestTimeoutError(f"request {self.request_id} exceeded its deadline")
