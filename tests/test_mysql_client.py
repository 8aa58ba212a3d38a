import pytest
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

from commonkit.mysql_client import MySQL, MySQLConfig, build_dsn


def _config(**overrides):
    password = "password"
    values = dict(
        username="user",
        password=password,
        address="127.0.0.1:3306",
        database_name="appdb",
    )
    values.update(overrides)
    return MySQLConfig(**values)


def test_build_dsn_round_trip():
    url = make_url(build_dsn(_config()))
    assert url.username == "user"
    assert url.password == "password"
    assert url.host == "127.0.0.1"
    assert url.port == 3306
    assert url.database == "appdb"


def test_build_dsn_charset_and_driver():
    url = make_url(build_dsn(_config()))
    assert url.query["charset"] == "utf8"
    assert url.drivername == "mysql+pymysql"


def test_build_dsn_without_port():
    url = make_url(build_dsn(_config(address="db.example.com")))
    assert url.host == "db.example.com"
    assert url.port is None


def test_build_dsn_rejects_bad_port():
    with pytest.raises(ValueError):
        build_dsn(_config(address="localhost:abc"))


def test_none_config():
    with pytest.raises(ValueError, match=r"\[mysql\]config is nil"):
        MySQL(None)


def test_unreachable_server_raises():
    with pytest.raises(OperationalError):
        MySQL(_config(address="127.0.0.1:1", max_idle_conns=2, max_open_conns=4))