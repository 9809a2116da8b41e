"""Shared fixtures for irq_metrics tests."""

import pytest

from irq_metrics.collectors import Datapoint


INTERRUPTS = """\
           CPU0       CPU1       CPU2       CPU3
  0:         44          0          0          0   IO-APIC   2-edge      timer
  1:          0          0          9          0   IO-APIC   1-edge      i8042
 42:          1          2          3          4   PCI-MSI 524288-edge      eth0
NMI:          0          0          0          0   Non-maskable interrupts
LOC:     123456     234567     345678     456789   Local timer interrupts
ERR:          0
"""

SOFTIRQS = """\
                    CPU0       CPU1
          HI:          0          1
       TIMER:        100        200
      NET_TX:          1          2
      NET_RX:         10         20
"""


class Clock:
    """Manually advanced time source."""

    def __init__(self, ts=1000.0):
        self.ts = ts

    def __call__(self):
        return self.ts

    def advance(self, seconds):
        self.ts += seconds
        return self.ts


@pytest.fixture(autouse=True)
def reset_counter_cache():
    """Datapoint counter state is class-level, isolate it between tests."""
    Datapoint._counter_cache.clear()
    Datapoint._counter_cache_check_ts = 0
    yield
    Datapoint._counter_cache.clear()
    Datapoint._counter_cache_check_ts = 0


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def interrupts_file(tmp_path):
    path = tmp_path / "interrupts"
    path.write_text(INTERRUPTS)
    return path


@pytest.fixture
def softirqs_file(tmp_path):
    path = tmp_path / "softirqs"
    path.write_text(SOFTIRQS)
    return path
