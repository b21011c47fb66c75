from conftest import FakeResponse, FakeSession
from weatherpane.controller import LookupController
from weatherpane.endpoints import alerts_shape, city_shape
from weatherpane.fetcher import DataFetcher
from weatherpane.models import ErrorKind
from weatherpane.render.page import PageDisplay
from weatherpane.render.renderer import Renderer


def reading(name, country, temp):
    return {"name": name, "sys": {"country": country}, "main": {"temp": temp, "humidity": 50}, "weather": [{"description": "clear sky"}]}


def build(session, shape, kind, discard_stale=False, input_value=None):
    display = PageDisplay(kind, input_value=input_value)
    controller = LookupController(
        DataFetcher(session, shape),
        Renderer(display, shape),
        display,
        max_workers=4,
        discard_stale=discard_stale,
    )
    return controller, display


def test_trigger_reads_input_and_renders_results(alerts_payload):
    session = FakeSession(default=FakeResponse(200, alerts_payload))
    controller, display = build(session, alerts_shape(), "alerts", input_value="tx")
    with controller:
        result = controller.trigger()
    assert result.ok
    assert display.state.mode == "results"
    assert display.view.text_of("summary").endswith("TX: 2")
    assert display.input_value == ""


def test_trigger_routes_failure_to_error_region():
    session = FakeSession(default=FakeResponse(404))
    controller, display = build(session, city_shape("k"), "city", input_value="Atlantis")
    with controller:
        result = controller.trigger()
    assert result.error.kind is ErrorKind.NOT_FOUND
    assert display.state.mode == "error"
    assert display.error_text == "City not found. Please check the city name."


def test_empty_input_renders_error_without_request():
    session = FakeSession(default=FakeResponse(200, {}))
    controller, display = build(session, alerts_shape(), "alerts", input_value="")
    with controller:
        controller.trigger()
    assert session.calls == []
    assert display.error_text == "Please enter a state abbreviation."


def test_concurrent_fetches_keep_their_own_payloads():
    session = FakeSession(
        routes={
            "q=Paris": FakeResponse(200, reading("Paris", "FR", 18)),
            "q=Lima": FakeResponse(200, reading("Lima", "PE", 22)),
        }
    )
    controller, _ = build(session, city_shape("k"), "city")
    with controller:
        paris = controller.submit("Paris")
        lima = controller.submit("Lima")
        paris_result, lima_result = paris.result(timeout=5), lima.result(timeout=5)
    assert paris_result.payload["name"] == "Paris"
    assert lima_result.payload["name"] == "Lima"
    assert len(session.calls) == 2


def test_last_settled_lookup_wins_by_default():
    session = FakeSession(
        routes={
            "q=Paris": FakeResponse(200, reading("Paris", "FR", 18)),
            "q=Lima": FakeResponse(200, reading("Lima", "PE", 22)),
        }
    )
    gate = session.hold("q=Paris")
    controller, display = build(session, city_shape("k"), "city")
    with controller:
        slow = controller.submit("Paris")
        controller.submit("Lima").result(timeout=5)
        assert display.view.text_of("location") == "Lima, PE"
        gate.set()
        slow.result(timeout=5)
    assert display.view.text_of("location") == "Paris, FR"


def test_discard_stale_keeps_newest_lookup():
    session = FakeSession(
        routes={
            "q=Paris": FakeResponse(200, reading("Paris", "FR", 18)),
            "q=Lima": FakeResponse(200, reading("Lima", "PE", 22)),
        }
    )
    gate = session.hold("q=Paris")
    controller, display = build(session, city_shape("k"), "city", discard_stale=True)
    with controller:
        slow = controller.submit("Paris")
        controller.submit("Lima").result(timeout=5)
        gate.set()
        stale = slow.result(timeout=5)
    assert stale.ok
    assert display.view.text_of("location") == "Lima, PE"


def test_stale_error_does_not_replace_newer_results():
    session = FakeSession(
        routes={
            "q=Nowhere": FakeResponse(404),
            "q=Lima": FakeResponse(200, reading("Lima", "PE", 22)),
        }
    )
    gate = session.hold("q=Nowhere")
    controller, display = build(session, city_shape("k"), "city", discard_stale=True)
    with controller:
        slow = controller.submit("Nowhere")
        controller.submit("Lima").result(timeout=5)
        gate.set()
        slow.result(timeout=5)
    assert display.state.mode == "results"
    assert not display.error_visible



class ExplodingFetcher:
    def fetch(self, value):
        raise RuntimeError("Network error")


def test_fetcher_crash_is_rendered_as_error():
    shape = city_shape("k")
    display = PageDisplay("city", input_value="Paris")
    with LookupController(ExplodingFetcher(), Renderer(display, shape), display) as controller:
        result = controller.trigger()
    assert result.error.kind is ErrorKind.NETWORK_ERROR
    assert display.state.mode == "error"
    assert display.error_text == "Network error"
