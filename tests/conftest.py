import gzip

import pytest

import fitlog2tcx.appconfig as appconfig

ACTIVITY_ID = "6f1c0f3e-7d2a-4c8e-9b4a-1f2e3d4c5b6a"

SAMPLE_FITLOG = f"""<?xml version="1.0" encoding="utf-8"?>
<FitnessWorkbook xmlns="http://www.zonefivesoftware.com/xmlschemas/FitLogArchive/v1">
  <AthleteLog>
    <Athlete Id="00000000-0000-0000-0000-000000000001" Name="Test Athlete" />
    <Activity StartTime="2020-01-01T08:00:00Z" Id="{ACTIVITY_ID}">
      <Duration TotalSeconds="3600.5" />
      <Distance TotalMeters="10000" />
      <Calories TotalCal="700" />
      <Category Id="11111111-2222-3333-4444-555555555555" Name="Hardlopen" />
      <Laps>
        <Lap StartTime="2020-01-01T08:00:00Z" DurationSeconds="1800.9">
          <Calories TotalCal="350.6" />
        </Lap>
        <Lap StartTime="2020-01-01T08:30:00Z" DurationSeconds="1799.6">
          <Calories TotalCal="349.4" />
        </Lap>
      </Laps>
      <DistanceMarkers>
        <Marker dist="5000" />
      </DistanceMarkers>
      <Track StartTime="2020-01-01T08:00:00Z">
        <pt tm="0" lat="52.1" lon="5.1" ele="3" hr="120" />
        <pt tm="125" lat="52.2" lon="5.2" />
      </Track>
    </Activity>
    <Activity StartTime="2020-01-02T09:00:00+01:00" Id="{{0b7e1c2d-3f4a-4b5c-8d6e-7f8091a2b3c4}}">
      <Category Name="Fietsen" />
      <Laps>
        <Lap StartTime="2020-01-02T08:00:00Z" DurationSeconds="60" />
      </Laps>
    </Activity>
  </AthleteLog>
</FitnessWorkbook>
"""


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch):
    """Keep config files in the working tree and the environment out of every test."""
    monkeypatch.setattr(appconfig, "_FILE_PATHS", [])
    monkeypatch.delenv(appconfig.CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def write_fitlog(tmp_path):
    """Return a helper that writes fitlog XML (optionally gzipped) into tmp_path."""

    def _write(content=SAMPLE_FITLOG, name="sample.fitlog", compress=False):
        path = tmp_path / name
        if compress:
            with gzip.open(path, "wb") as f:
                f.write(content.encode("utf-8"))
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_fitlog(write_fitlog):
    return write_fitlog()
