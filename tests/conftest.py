"""Pytest configuration and shared fixtures."""

import json

import pytest

from rostr.config import Configuration, Destination, Operation, Source, Transfer


def make_transfer_dict(transfer_id, operation="overwrite", src="my/path/", dst="my/destination"):
    """Return the plain-data form of a transfer."""
    return {
        "id": transfer_id,
        "operation": operation,
        "src": {"path": src, "option": ["TRUNCATE=1", "option3"]},
        "dst": {"path": dst, "option": ["option2", "option3"]},
    }


def make_process_dict(process_id, parallel=False, transfer_ids=(1,)):
    """Return the plain-data form of a process."""
    return {
        "id": process_id,
        "parallel": parallel,
        "transfer": [make_transfer_dict(t) for t in transfer_ids],
    }


@pytest.fixture
def sample_config_json():
    """Return a configuration with processes 4 to 9."""
    processes = [
        make_process_dict(4, parallel=True, transfer_ids=(1, 2, 3, 4)),
        make_process_dict(5),
        make_process_dict(6, parallel=True, transfer_ids=(10, 20)),
        make_process_dict(7, transfer_ids=()),
        make_process_dict(8),
        make_process_dict(9, parallel=True, transfer_ids=(1, 2)),
    ]
    return json.dumps(processes, indent=2)


@pytest.fixture
def sample_process_json():
    """Return a single process object."""
    return """
{
    "id": 2308,
    "parallel": true,
    "transfer": [
        {
            "id": 2432,
            "operation": "overwrite",
            "src": {
                "path": "my/path/",
                "option": ["TRUNCATE=1", "option3"]
            },
            "dst": {
                "path": "my/destination",
                "option": ["option2", "option3"]
            }
        }
    ]
}
"""


@pytest.fixture
def sample_transfer_json():
    """Return a single transfer object."""
    return """
{
    "id": 1,
    "operation": "upsert",
    "src": {
        "path": "PG:dbname=osm tables=planet_osm_line",
        "option": ["LIST_ALL_TABLES=YES"]
    },
    "dst": {
        "path": "/data/lines.gpkg",
        "option": ["SPATIAL_INDEX=NO", "FID=fid"]
    }
}
"""


@pytest.fixture
def sample_config(sample_config_json):
    """Return the parsed sample configuration."""
    return Configuration.from_str(sample_config_json)


@pytest.fixture
def simple_transfer():
    """Return a transfer with one option on each side."""
    return Transfer(
        id=1,
        operation=Operation.OVERWRITE,
        src=Source(path="a", options=["X"]),
        dst=Destination(path="b", options=["Y"]),
    )


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def config_file(tmp_config_dir, sample_config_json):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "configuration.json"
    config_path.write_text(sample_config_json)
    return config_path
