"""Tests for vploop.render."""

import json
import xml.etree.ElementTree as ET

import pytest

from conftest import make_frame
from vploop.decoder import decode
from vploop.reading import Reading, UnitSystem, WindSource
from vploop.render import render, to_csv, to_dict, to_json, to_plain, to_prtg
from vploop.units import to_metric


@pytest.fixture
def imperial():
    """Decoded fixture reading, imperial units."""
    return decode(make_frame())


@pytest.fixture
def metric(imperial):
    """Decoded fixture reading, metric units."""
    return to_metric(imperial)


class TestToDict:
    """Tests for to_dict."""

    def test_keys_in_order(self, imperial):
        """Keys follow the fixed field order."""
        assert list(to_dict(imperial)) == [
            "Success", "Units", "InsideTemperature", "InsideHumidity",
            "OutsideTemperature", "OutsideHumidity", "WindSpeed",
            "WindDirection", "BarometricPressure", "RainRate",
        ]

    def test_average_wind_label(self):
        """AVERAGE wind source is labelled AvgWindSpeed."""
        d = to_dict(decode(make_frame(), WindSource.AVERAGE))
        assert d["AvgWindSpeed"] == 3
        assert "WindSpeed" not in d

    def test_failure(self):
        """A failure reading has None for every telemetry field."""
        d = to_dict(Reading.failure())
        assert d["Success"] is False
        assert d["InsideTemperature"] is None


class TestToCsv:
    """Tests for to_csv."""

    def test_single_line(self, imperial):
        """Without header, one line of values."""
        assert to_csv(imperial) == "True,imperial,68.0,45,54.3,80,5.0,270,29.921,0.12"

    def test_header(self, metric):
        """With header, a label line precedes the values."""
        header, row = to_csv(metric, header=True).split("\n")
        assert header.startswith("Success,Units,InsideTemperature")
        assert row.startswith("True,metric,20.0,")

    def test_failure_empty_fields(self):
        """Missing values render as empty CSV fields."""
        assert to_csv(Reading.failure()) == "False,imperial,,,,,,,,"


class TestToPlain:
    """Tests for to_plain."""

    def test_units_shown(self, metric):
        """Values carry their unit."""
        text = to_plain(metric)
        assert "InsideTemperature   : 20.0 °C" in text
        assert "BarometricPressure  : 1013.2 hPa" in text

    def test_failure(self):
        """Missing values render as --."""
        text = to_plain(Reading.failure(UnitSystem.METRIC))
        assert "Success             : False" in text
        assert "RainRate            : --" in text


class TestToJson:
    """Tests for to_json."""

    def test_roundtrip(self, imperial):
        """JSON output parses back to the dict form."""
        assert json.loads(to_json(imperial)) == to_dict(imperial)


class TestToPrtg:
    """Tests for to_prtg."""

    def test_channels(self, metric):
        """One result per channel with a custom unit."""
        root = ET.fromstring(to_prtg(metric))
        assert root.tag == "prtg"
        results = root.findall("result")
        assert len(results) == 8
        first = results[0]
        assert first.findtext("channel") == "InsideTemperature"
        assert first.findtext("value") == "20.0"
        assert first.findtext("float") == "1"
        assert first.findtext("customunit") == "°C"

    def test_failure_is_error(self):
        """A failed reading is reported as a PRTG error."""
        root = ET.fromstring(to_prtg(Reading.failure()))
        assert root.findtext("error") == "1"
        assert root.findtext("text")
        assert root.findall("result") == []


class TestRender:
    """Tests for the render dispatcher."""

    @pytest.mark.parametrize("fmt", ["csv", "plain", "prtg", "json"])
    def test_known_formats(self, imperial, fmt):
        """Each known format renders to a non-empty string."""
        assert render(imperial, fmt)

    def test_unknown_format(self, imperial):
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="yaml"):
            render(imperial, "yaml")
