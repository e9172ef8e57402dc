"""Tests for JSON file helpers."""

import pytest

from befithub.errors import ConfigError, DataError
from befithub.utils.file_io import read_json, read_packaged_json, write_json


class TestReadJson:
    """Tests for reading input files."""
    
    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "menus.json"
        path.write_text('[{"name": "Menú"}]', encoding="utf-8")
        
        assert read_json(path) == [{"name": "Menú"}]
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            read_json(tmp_path / "missing.json")
    
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        
        with pytest.raises(DataError):
            read_json(path)
    
    def test_invalid_utf8(self, tmp_path):
        """Test a Latin-1 encoded file is reported as a data error."""
        path = tmp_path / "latin1.json"
        path.write_bytes('{"name": "Menú"}'.encode("latin-1"))
        
        with pytest.raises(DataError):
            read_json(path)


class TestWriteJson:
    """Tests for writing output files."""
    
    def test_creates_parents_and_reports_size(self, tmp_path):
        output = tmp_path / "out" / "catalog.json"
        
        metadata = write_json({"exercises": []}, output)
        
        assert output.is_file()
        assert metadata["file_size_bytes"] == output.stat().st_size
        assert read_json(output) == {"exercises": []}
    
    def test_packaged_form(self):
        assert read_packaged_json("checkin_form.json")["name"] == "Revisión Semanal"
