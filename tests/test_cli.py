import io
import sys

import pytest

from frubuild.cli import main, parser
from frubuild.types import TypeCode

CONFIG = b"""
[cia]
chassis_type = 0x17
location = "Rack"

[mia_sc]
format_version = 0x82
customer_id = 1
"""

@pytest.fixture
def config(tmp_path):
    path = tmp_path / "fru.toml"
    path.write_bytes(CONFIG)
    return path

def test_build_to_file(tmp_path, config, logger):
    out = tmp_path / "fru.bin"
    assert main(["-c", str(config), "-o", str(out)], logger) == 0
    data = out.read_bytes()
    assert data[:8] == bytes([0x01, 0x00, 0x01, 0x00, 0x00, 0x03, 0x00, 0xfb])
    assert data[18:23] == b"\x83\x72\x38\xae\xc1"
    assert len(data) == 40
    assert any("40 bytes" in m for m in logger.infos)

def test_ascii8_option(tmp_path, config, logger):
    out = tmp_path / "fru.bin"
    assert main(["-a", "-c", str(config), "-o", str(out)], logger) == 0
    assert out.read_bytes()[18:24] == b"\xc4Rack\xc1"

def test_encoding_option(tmp_path, config, logger):
    out = tmp_path / "fru.bin"
    assert main(["-e", "latin1", "-c", str(config), "-o", str(out)], logger) == 0
    assert out.read_bytes()[18:24] == b"\xc4Rack\xc1"

def test_encoding_option_invalid(capsys):
    with pytest.raises(SystemExit):
        parser().parse_args(["-e", "ebcdic"])

def test_parser_defaults():
    args = parser().parse_args([])
    assert args.encoding == TypeCode.SIX_BIT_ASCII
    assert args.size == 0
    assert args.config is None and args.output is None

def test_yaml_configuration(tmp_path, logger):
    config = tmp_path / "fru.yaml"
    config.write_bytes(b"cia:\n  chassis_type: 1\n")
    out = tmp_path / "fru.bin"
    assert main(["-c", str(config), "-o", str(out)], logger) == 0
    assert out.read_bytes()[2] == 1

def test_explicit_format(tmp_path, logger):
    config = tmp_path / "fru.cfg"
    config.write_bytes(b"cia:\n  chassis_type: 1\n")
    out = tmp_path / "fru.bin"
    assert main(["-f", "yaml", "-c", str(config), "-o", str(out)], logger) == 0

def test_size_limit(tmp_path, config, logger, capsys):
    out = tmp_path / "fru.bin"
    assert main(["-s", "32", "-c", str(config), "-o", str(out)], logger) == 1
    assert "Err: " in capsys.readouterr().err
    assert not out.exists()
    assert main(["-s", "40", "-c", str(config), "-o", str(out)], logger) == 0

def test_negative_size(config, logger, capsys):
    assert main(["-s", "-1", "-c", str(config)], logger) == 1
    assert "Invalid maximum file size" in capsys.readouterr().err

def test_read_not_implemented(logger, capsys):
    assert main(["-r", "-i", "fru.bin"], logger) == 1
    assert "not implemented" in capsys.readouterr().err

def test_missing_config_file(tmp_path, logger, capsys):
    assert main(["-c", str(tmp_path / "missing.toml")], logger) == 1
    assert capsys.readouterr().err.startswith("Err: ")

def test_configuration_error(tmp_path, logger, capsys):
    config = tmp_path / "fru.toml"
    config.write_bytes(b"[cia]\npart_number = \"x\"\n")
    assert main(["-c", str(config), "-o", str(tmp_path / "fru.bin")], logger) == 1
    assert "cia.chassis_type" in capsys.readouterr().err

def test_stdin_to_stdout(monkeypatch, capsysbinary, logger):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
    assert main([], logger) == 0
    assert capsysbinary.readouterr().out == bytes([0x01, 0, 0, 0, 0, 0, 0, 0xff])
