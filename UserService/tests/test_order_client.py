import threading
from unittest.mock import Mock

import pytest
import requests

from service.orders import OrderClient


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def orders_client(session):
    return OrderClient("http://orders:4001/", timeout=2.5, session_factory=lambda: session)


def response_with(payload=None, status_error=None, json_error=None):
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def test_returns_orders_from_service(orders_client, session):
    session.get.return_value = response_with([{"orderId": "o1"}, {"orderId": "o2"}])

    orders = orders_client.get_orders("u1")

    assert orders == [{"orderId": "o1"}, {"orderId": "o2"}]
    session.get.assert_called_once_with(
        "http://orders:4001/orders", params={"user": "u1"}, timeout=2.5
    )


def test_user_id_is_sent_as_query_parameter(orders_client, session):
    session.get.return_value = response_with([])

    orders_client.get_orders("a&b=c")

    assert session.get.call_args.kwargs["params"] == {"user": "a&b=c"}


def test_connection_refused_returns_empty(orders_client, session):
    session.get.side_effect = requests.ConnectionError("Connection refused")

    assert orders_client.get_orders("u1") == []


def test_timeout_returns_empty(orders_client, session):
    session.get.side_effect = requests.Timeout("read timed out")

    assert orders_client.get_orders("u1") == []


def test_http_error_status_returns_empty(orders_client, session):
    session.get.return_value = response_with(status_error=requests.HTTPError("503 Server Error"))

    assert orders_client.get_orders("u1") == []


def test_invalid_json_returns_empty(orders_client, session):
    session.get.return_value = response_with(json_error=ValueError("Expecting value"))

    assert orders_client.get_orders("u1") == []


def test_non_list_body_returns_empty(orders_client, session):
    session.get.return_value = response_with({"orders": [{"orderId": "o1"}]})

    assert orders_client.get_orders("u1") == []


def test_close_closes_session(orders_client, session):
    session.get.return_value = response_with([])
    orders_client.get_orders("u1")

    orders_client.close()

    session.close.assert_called_once()


def test_close_before_any_lookup_creates_no_session():
    factory = Mock()
    client = OrderClient("http://orders:4001", session_factory=factory)

    client.close()

    factory.assert_not_called()


def test_deeply_nested_body_returns_empty(orders_client, session):
    session.get.return_value = response_with(
        json_error=RecursionError("maximum recursion depth exceeded while decoding a JSON array")
    )

    assert orders_client.get_orders("u1") == []


def test_each_thread_gets_its_own_session():
    created = []

    def factory():
        session = Mock(spec=requests.Session)
        session.get.return_value = response_with([])
        created.append(session)
        return session

    client = OrderClient("http://orders:4001", session_factory=factory)
    client.get_orders("u1")
    client.get_orders("u2")

    worker = threading.Thread(target=client.get_orders, args=("u3",))
    worker.start()
    worker.join()

    assert len(created) == 2
    assert created[0].get.call_count == 2
    assert created[1].get.call_count == 1

    client.close()

    for session in created:
        session.close.assert_called_once()
