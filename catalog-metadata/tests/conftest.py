# (C) 2021 GoodData Corporation
import pytest

from catalog_metadata import CapabilitySnapshot, MetadataQueryRunner


class RecordingRunner(MetadataQueryRunner):
    """
    Runner that remembers executed queries and returns canned records.
    """

    def __init__(self, records=None):
        self.records = list(records or [])
        self.queries = []

    def execute(self, query):
        self.queries.append(query)

        return list(self.records)


class ScriptedRunner(RecordingRunner):
    """
    Runner returning the given lists of records for consecutive queries.
    """

    def __init__(self, *results):
        super().__init__()
        self.results = list(results)

    def execute(self, query):
        self.queries.append(query)

        return list(self.results.pop(0))


class FailingRunner(MetadataQueryRunner):
    def execute(self, query):
        pytest.fail(f"query must not be executed: {query.sql}")


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def runner_with():
    """
    Creates recording runner returning the given records.
    """
    return RecordingRunner


@pytest.fixture
def runner_with_results():
    return ScriptedRunner


@pytest.fixture
def failing_runner():
    return FailingRunner()


@pytest.fixture
def fb21():
    return CapabilitySnapshot.for_version(2, 1)


@pytest.fixture
def fb25():
    return CapabilitySnapshot.for_version(2, 5)


@pytest.fixture
def fb3():
    return CapabilitySnapshot.for_version(3, 0)


@pytest.fixture
def fb3_packages():
    return CapabilitySnapshot.for_version(3, 0, catalog_as_package=True)


@pytest.fixture
def fb4():
    return CapabilitySnapshot.for_version(4, 0)


@pytest.fixture
def fb5():
    return CapabilitySnapshot.for_version(5, 0)


@pytest.fixture
def fb6():
    return CapabilitySnapshot.for_version(6, 0)


@pytest.fixture
def fb6_packages():
    return CapabilitySnapshot.for_version(6, 0, catalog_as_package=True)
