from map_scout.collector.assembler import assemble_artifacts
from map_scout.collector.models import Artifact


def test_drops_scripts_without_locator_and_keeps_order():
    a = Artifact(script_url="a.js", source_map_url="a.js.map", map={"version": 3})
    b = Artifact(script_url="b.js", error_message="Could not resolve map url: http://")
    assert assemble_artifacts([None, a, None, b, None]) == (a, b)


def test_empty_input():
    assert assemble_artifacts([]) == ()


def test_to_dict_has_exactly_one_of_map_or_error():
    ok = Artifact(script_url="a.js", source_map_url="a.js.map", map=None)
    failed = Artifact(script_url="b.js", error_message="Error: Failed fetching source map (404)")
    assert ok.to_dict() == {"scriptUrl": "a.js", "sourceMapUrl": "a.js.map", "map": None}
    assert failed.to_dict() == {
        "scriptUrl": "b.js",
        "sourceMapUrl": None,
        "errorMessage": "Error: Failed fetching source map (404)",
    }
