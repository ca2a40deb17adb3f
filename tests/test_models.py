import datetime as dt
import unittest

from app.app_types import Signal, SignalValue
from app.models import SignalModel, signal_set_to_models


class TestModels(unittest.TestCase):
    def test_signal_model_dumps_with_upstream_aliases(self):
        signal = Signal(
            generated_at=dt.datetime(2022, 6, 2, 21, 51, tzinfo=dt.timezone.utc),
            day=dt.datetime(2022, 6, 3, tzinfo=dt.timezone.utc),
            risk_level=2,
            message="Risque de coupures",
            values=(SignalValue(time_slot=8, value=3),),
        )
        dumped = SignalModel.from_signal(signal).model_dump(by_alias=True)
        self.assertEqual(dumped["dvalue"], 2)
        self.assertEqual(dumped["jour"], signal.day)
        self.assertEqual(dumped["values"], [{"pas": 8, "hvalue": 3}])

    def test_signal_model_accepts_upstream_payload(self):
        model = SignalModel.model_validate({
            "GenerationFichier": "2022-06-02T21:51:01+02:00",
            "jour": "2022-06-03T00:00:00+02:00",
            "dvalue": 1,
            "message": "",
            "values": [{"pas": 0, "hvalue": 1}],
        })
        self.assertEqual(model.risk_level, 1)
        self.assertEqual(model.values[0].time_slot, 0)

    def test_empty_signal_set_is_an_empty_list(self):
        self.assertEqual(signal_set_to_models(()), [])


if __name__ == "__main__":
    unittest.main()
