from __future__ import annotations

from typing import Iterator

import pytest

from modal_edit.runtime import telemetry


@pytest.fixture(autouse=True)
def quiet_telemetry() -> Iterator[None]:
    telemetry.configure(preset="quiet")
    yield
    telemetry.configure(preset="quiet")
