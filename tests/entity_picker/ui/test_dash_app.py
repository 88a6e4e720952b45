import json

from entity_picker.ui.dash_app import create_dash_app


def test_create_dash_app_from_config_dir(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "vendors.json").write_text(json.dumps([{"id": 1, "name": "Prusament"}]))
    (tmp_path / "global.json").write_text(
        json.dumps({"ui_title": "Vendor Picker", "data_file": "data/vendors.json"})
    )

    app = create_dash_app(tmp_path)

    assert app.title == "Vendor Picker"
    assert app.layout is not None
    assert len(app.callback_map) >= 6
