#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
import pathlib
from typing import Callable

FORMATS_TOML = """
[formats.bits_per_sec]
base = "binary"
constraint = "unit_and_above"
precision = 2
grouping = "_"
unit = "bit/s"

[formats.meters]
constraint = "unconstrained"
unit = "m"
"""


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def formats_file(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Fixture to create a TOML format presets file with specified content."""

    def _create_file(content: str = FORMATS_TOML) -> pathlib.Path:
        file_path = tmp_path / "formats.toml"
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _create_file
