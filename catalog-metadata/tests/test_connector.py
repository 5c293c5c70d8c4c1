# (C) 2021 GoodData Corporation
import pytest

from catalog_metadata import (
    CapabilitySnapshot,
    DbApiQueryRunner,
    DbConnector,
    FirebirdConnector,
    Generation,
    MetadataQuery,
    read_capabilities,
)
from catalog_metadata.connector import _convert_to_python


class FakeCursor:
    def __init__(self, description, rows, error=None):
        self.description = description
        self._rows = rows
        self._error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params):
        self.executed.append((sql, params))

        if self._error is not None:
            raise self._error

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True


class FakeDatabaseMetaData:
    def getDatabaseProductName(self):
        return "Firebird"

    def getDatabaseProductVersion(self):
        return "WI-V3.0.10.33601 Firebird 3.0"

    def getDatabaseMajorVersion(self):
        return 3

    def getDatabaseMinorVersion(self):
        return 0


class FakeJavaConnection:
    def getMetaData(self):
        return FakeDatabaseMetaData()


class FakeConnection:
    def __init__(self, cursor=None):
        self._cursor = cursor
        self.jconn = FakeJavaConnection()
        self.closed = False

    def cursor(self):
        return self._cursor

    def close(self):
        self.closed = True


def _java_type(module, name, base=object, **methods):
    java_type = type(name, (base,), methods)
    java_type.__module__ = module
    java_type.__qualname__ = name

    return java_type


def test_query_runner_returns_records_with_upper_case_labels():
    cursor = FakeCursor([("table_name",), ("Remarks",)], [("EMPLOYEE", None), ("PROJECT", "x")])
    runner = DbApiQueryRunner(FakeConnection(cursor))

    records = runner.execute(MetadataQuery(sql="select 1", parameters=("EMP",)))

    assert records == [{"TABLE_NAME": "EMPLOYEE", "REMARKS": None}, {"TABLE_NAME": "PROJECT", "REMARKS": "x"}]
    assert cursor.executed == [("select 1", ["EMP"])]
    assert cursor.closed


def test_query_runner_closes_cursor_on_error():
    cursor = FakeCursor([], [], error=RuntimeError("connection lost"))
    runner = DbApiQueryRunner(FakeConnection(cursor))

    with pytest.raises(RuntimeError):
        runner.execute(MetadataQuery(sql="select 1", parameters=[]))

    assert cursor.closed


def test_convert_java_values():
    java_integer = _java_type("java.lang", "Integer", intValue=lambda self: 42)
    java_big_decimal = _java_type("java.math", "BigDecimal", toString=lambda self: "12.50")
    j_long = _java_type("jpype._jpype", "JLong", base=int)

    assert _convert_to_python(java_integer()) == 42
    assert _convert_to_python(java_big_decimal()) == "12.50"
    assert _convert_to_python(j_long(7)) == 7
    assert type(_convert_to_python(j_long(7))) is int


@pytest.mark.parametrize("value", [None, 1, "EMPLOYEE", 1.5, True])
def test_convert_python_values(value):
    assert _convert_to_python(value) is value


def test_convert_unknown_java_type():
    java_object = _java_type("java.lang", "Object")

    with pytest.raises(TypeError):
        _convert_to_python(java_object())


def test_read_capabilities(runner_with):
    capabilities = read_capabilities(runner_with([{"ENGINE_VERSION": "4.0.2"}]), catalog_as_package=True)

    assert capabilities == CapabilitySnapshot(4, 0, True)
    assert capabilities.uses_catalog_as_package


def test_read_capabilities_without_result(runner_with):
    with pytest.raises(ValueError):
        read_capabilities(runner_with([]))


@pytest.mark.parametrize(
    "engine_version,expected",
    [
        ("2.5.9", (2, 5, Generation.FB2_5)),
        ("WI-V3.0.10.33601 Firebird 3.0", (3, 0, Generation.FB3)),
        ("WI-V5.0.1.1469 Firebird 5.0", (5, 0, Generation.FB5)),
        ("6.0.0", (6, 0, Generation.FB6)),
    ],
)
def test_capabilities_from_engine_version(engine_version, expected):
    capabilities = CapabilitySnapshot.from_engine_version(engine_version)

    assert (capabilities.version_major, capabilities.version_minor, capabilities.generation) == expected


def test_capabilities_from_invalid_engine_version():
    with pytest.raises(ValueError):
        CapabilitySnapshot.from_engine_version("unknown")


def test_firebird_connector_properties():
    connector = FirebirdConnector(
        connection_string="jdbc:firebirdsql://localhost/employee", user="SYSDBA", password="masterkey"
    )

    assert connector.classname == "org.firebirdsql.jdbc.FBDriver"
    assert connector.create_properties() == {"user": "SYSDBA", "password": "masterkey"}
    assert not connector.catalog_as_package

    connector.use_catalog_as_package = True

    assert connector.create_properties()["useCatalogAsPackage"] == "true"
    assert connector.catalog_as_package


def test_generic_connector_never_reports_packages():
    assert not DbConnector(classname="org.example.Driver").catalog_as_package


def test_connector_metadata(monkeypatch):
    calls = []
    conn = FakeConnection()

    def _connect(**kwargs):
        calls.append(kwargs)
        return conn

    monkeypatch.setattr("catalog_metadata.connector.jaydebeapi.connect", _connect)
    connector = FirebirdConnector(
        connection_string="jdbc:firebirdsql://localhost/employee",
        driver_path="/opt/jaybird.jar",
        user="SYSDBA",
        password="masterkey",
        use_catalog_as_package=True,
    )

    with connector.metadata() as md:
        assert md.capabilities == CapabilitySnapshot(3, 0, True)
        assert md.product_info.product_name == "Firebird"

    assert conn.closed
    assert calls == [
        dict(
            jclassname="org.firebirdsql.jdbc.FBDriver",
            url="jdbc:firebirdsql://localhost/employee",
            driver_args={"user": "SYSDBA", "password": "masterkey", "useCatalogAsPackage": "true"},
            jars="/opt/jaybird.jar",
        )
    ]


def test_connector_metadata_with_given_capabilities(monkeypatch):
    monkeypatch.setattr("catalog_metadata.connector.jaydebeapi.connect", lambda **kwargs: FakeConnection())
    capabilities = CapabilitySnapshot.for_version(4, 0)

    with FirebirdConnector().metadata(capabilities=capabilities) as md:
        assert md.capabilities is capabilities
