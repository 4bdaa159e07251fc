import json

from tripfinder.report_data import departure_options, stop_options, waypoints_data
from tripfinder.report_render import render_html_report
from tripfinder.report_writer import render_and_write_html, write_result_json
from tripfinder.stops import Stop
from tripfinder.trip_matcher import Departure


def test_stop_options_fall_back_to_id():
    options = stop_options([Stop("A", stop_name="Pile"), Stop("B")])
    assert options == [{"value": "A", "label": "Pile"}, {"value": "B", "label": "B"}]


def test_departure_options_mark_next_day():
    options = departure_options([
        Departure("T1", "23:55:00", 86100),
        Departure("T2", "24:20:00", 87600),
    ])

    assert [option["label"] for option in options] == ["23:55:00", "00:20:00 (+1)"]
    assert options[1]["value"] == "T2"
    assert options[1]["next_day"]


def test_waypoints_data_without_waypoints():
    data = waypoints_data("T9", None)
    assert data["origin"] is None
    assert data["waypoints"] == []


def test_render_select_list():
    html = render_html_report("select_list.html.j2", {
        "title": "Start stops",
        "subtitle": None,
        "select_id": "start",
        "placeholder": "Select a start stop",
        "options": [{"value": "A", "label": "Pile & Gate"}],
        "issues": [],
    })

    assert '<select id="start" name="start">' in html
    assert '<option value="" disabled selected>Select a start stop</option>' in html
    assert '<option value="A">Pile &amp; Gate</option>' in html
    assert "No results." not in html


def test_render_empty_select_list():
    html = render_html_report("select_list.html.j2", {
        "title": "End stops",
        "select_id": "end",
        "placeholder": "Select an end stop",
        "options": [],
        "issues": ["Stop Q is referenced by stop_times but missing from stops"],
    })

    assert "No results." in html
    assert "Stop Q is referenced" in html


def test_write_result_json(tmp_path):
    path = write_result_json(str(tmp_path / "out"), "result.json", {"name": "Gruž"})

    with open(path, encoding="utf-8") as f:
        content = f.read()
    assert content == '{"name":"Gruž"}'


def test_write_result_json_pretty(tmp_path):
    path = write_result_json(str(tmp_path), "result.json", {"a": 1}, pretty=True)

    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"a": 1}
        f.seek(0)
        assert "\n" in f.read()


def test_render_and_write_html(tmp_path):
    output_path = tmp_path / "html" / "start_stops.html"
    render_and_write_html("select_list.html.j2", {
        "title": "Start stops",
        "select_id": "start",
        "placeholder": "Select a start stop",
        "options": [],
    }, str(output_path))

    assert output_path.exists()
    assert "<title>Start stops</title>" in output_path.read_text(encoding="utf-8")
