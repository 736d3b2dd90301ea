import pytest
import requests

from apps.tracking.client import ORDER_TERMINAL_STATUSES, LocationReporter, StatusPoller


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, responses=()):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def _next(self):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, timeout=None):
        self.calls.append(("GET", url, None))
        return self._next()

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, url, json))
        return self._next()


class TestStatusPoller:
    def test_stops_at_terminal_status_and_reports_changes(self):
        session = FakeSession(
            [
                FakeResponse({"status": "PENDING"}),
                FakeResponse({"status": "PENDING"}),
                FakeResponse({"status": "ACCEPTED"}),
                FakeResponse({"status": "COMPLETED"}),
            ]
        )
        updates, sleeps = [], []
        poller = StatusPoller(
            "http://api.test/tracking/ride/1",
            token="abc",
            interval=10,
            on_update=lambda data: updates.append(data["status"]),
            session=session,
            sleep=sleeps.append,
        )

        last = poller.run()

        assert updates == ["PENDING", "ACCEPTED", "COMPLETED"]
        assert last == {"status": "COMPLETED"}
        assert poller.polls == 4
        assert sleeps == [10, 10, 10]
        assert session.headers["Authorization"] == "Bearer abc"

    def test_max_polls(self):
        session = FakeSession([FakeResponse({"status": "PENDING"}) for _ in range(5)])
        poller = StatusPoller("http://api.test/x", max_polls=2, session=session, sleep=lambda s: None)
        poller.run()
        assert poller.polls == 2
        assert poller.last_status == "PENDING"

    def test_request_errors_keep_polling(self):
        session = FakeSession(
            [
                requests.ConnectionError("offline"),
                FakeResponse(status_code=502),
                FakeResponse({"status": "DELIVERED"}),
            ]
        )
        poller = StatusPoller(
            "http://api.test/tracking/order/1",
            terminal_statuses=ORDER_TERMINAL_STATUSES,
            session=session,
            sleep=lambda s: None,
        )
        assert poller.run() == {"status": "DELIVERED"}
        assert poller.polls == 3

    def test_stop_from_callback(self):
        session = FakeSession([FakeResponse({"status": "PENDING"}) for _ in range(3)])
        poller = StatusPoller("http://api.test/x", session=session, sleep=lambda s: None)
        poller.on_update = lambda data: poller.stop()
        poller.run()
        assert poller.polls == 1


class TestLocationReporter:
    def test_only_significant_moves_are_sent(self):
        session = FakeSession([FakeResponse({}), FakeResponse({})])
        reporter = LocationReporter(
            "http://api.test/riders/location",
            method="post",
            extra={"rider_id": "r-1"},
            session=session,
        )

        assert reporter.report(52.52, 13.405, speed=3.0) is True
        assert reporter.report(52.52005, 13.405) is False
        assert reporter.report(52.5202, 13.405) is True

        assert reporter.sent == 2
        method, url, payload = session.calls[0]
        assert method == "POST"
        assert payload == {"rider_id": "r-1", "latitude": 52.52, "longitude": 13.405, "speed": 3.0}

    def test_failed_send_does_not_move_reference(self):
        session = FakeSession([FakeResponse({}), FakeResponse(status_code=500), FakeResponse({})])
        reporter = LocationReporter("http://api.test/drivers/1/location", session=session)

        reporter.report(52.52, 13.405)
        with pytest.raises(requests.HTTPError):
            reporter.report(52.5202, 13.405)
        assert reporter.change_filter.last_location == (52.52, 13.405)

        assert reporter.report(52.5202, 13.405) is True
        assert session.calls[-1][0] == "PUT"
        assert reporter.sent == 2
