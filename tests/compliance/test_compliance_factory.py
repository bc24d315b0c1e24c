from datetime import datetime

from station_compliance.compliance.factory import ComplianceStrategyFactory
from station_compliance.compliance.strategies.base import PunchContext
from station_compliance.compliance.strategies.punch_in import (
    AbsentStrategy,
    EarlyArrivalStrategy,
    GracePeriodStrategy,
    LateArrivalStrategy,
    OnTimeArrivalStrategy,
)
from station_compliance.compliance.strategies.punch_out import (
    EarlyDepartureStrategy,
    OnTimeDepartureStrategy,
    OutOfOrderStrategy,
    OvertimeStrategy,
)


def _ctx(shift, punch_time, punch_in_time=None):
    return PunchContext(
        shift=shift,
        punch_time=punch_time,
        punch_in_time=punch_in_time,
        grace_minutes=20,
        early_departure_tolerance_minutes=15,
    )


def test_factory_punch_in_rules_in_order(day_shift):
    factory = ComplianceStrategyFactory()

    assert isinstance(factory.for_punch_in(_ctx(day_shift, datetime(2026, 3, 2, 8, 59))), EarlyArrivalStrategy)
    assert isinstance(factory.for_punch_in(_ctx(day_shift, datetime(2026, 3, 2, 9, 0))), OnTimeArrivalStrategy)
    assert isinstance(factory.for_punch_in(_ctx(day_shift, datetime(2026, 3, 2, 9, 0, 1))), GracePeriodStrategy)
    assert isinstance(factory.for_punch_in(_ctx(day_shift, datetime(2026, 3, 2, 9, 20, 1))), LateArrivalStrategy)
    assert isinstance(factory.for_punch_in(_ctx(day_shift, datetime(2026, 3, 2, 17, 0, 1))), AbsentStrategy)


def test_factory_punch_out_rules_in_order(day_shift):
    factory = ComplianceStrategyFactory()
    punched_in = datetime(2026, 3, 2, 9, 5)

    assert isinstance(
        factory.for_punch_out(_ctx(day_shift, datetime(2026, 3, 2, 9, 0), punched_in)), OutOfOrderStrategy
    )
    assert isinstance(
        factory.for_punch_out(_ctx(day_shift, datetime(2026, 3, 2, 12, 0), punched_in)), EarlyDepartureStrategy
    )
    assert isinstance(
        factory.for_punch_out(_ctx(day_shift, datetime(2026, 3, 2, 16, 50), punched_in)), OnTimeDepartureStrategy
    )
    assert isinstance(
        factory.for_punch_out(_ctx(day_shift, datetime(2026, 3, 2, 17, 1), punched_in)), OvertimeStrategy
    )
