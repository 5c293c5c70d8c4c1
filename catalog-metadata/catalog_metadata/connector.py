# (C) 2021 GoodData Corporation
import logging
from typing import Any, Callable, Optional

import jaydebeapi

from catalog_metadata.capabilities import CapabilitySnapshot
from catalog_metadata.catalog import CatalogMetadata
from catalog_metadata.metadata import MetadataProductInfo, MetadataRowTransformer
from catalog_metadata.query_base import MetadataQuery, MetadataQueryRunner
from catalog_metadata.rows import DEFAULT_ENCODED_STRING_CACHE_SIZE

logger = logging.getLogger(__name__)

_ENGINE_VERSION_QUERY = MetadataQuery(
    sql="select rdb$get_context('SYSTEM', 'ENGINE_VERSION') as ENGINE_VERSION from rdb$database",
    parameters=[],
)


class DbConnector:
    def __init__(
        self,
        classname=None,
        connection_string=None,
        driver_path=None,
        user=None,
        password=None,
    ):
        self._classname = classname
        self._connection_string = connection_string
        self._driver_path = driver_path
        self._user = user
        self._password = password

    @property
    def classname(self) -> str:
        return self._classname

    @property
    def connection_string(self) -> str:
        return self._connection_string

    @connection_string.setter
    def connection_string(self, val: str):
        self._connection_string = val

    @property
    def driver_path(self) -> str:
        return self._driver_path

    @driver_path.setter
    def driver_path(self, val: str):
        self._driver_path = val

    @property
    def user(self) -> str:
        return self._user

    @user.setter
    def user(self, val: str):
        self._user = val

    @property
    def password(self) -> str:
        return self._password

    @password.setter
    def password(self, val: str):
        self._password = val

    @property
    def catalog_as_package(self) -> bool:
        """
        Whether the connections made by this connector report packages as catalogs. The default implementation
        returns False; connectors for engines with packages override this.
        """
        return False

    def create_properties(self) -> dict[str, str]:
        """
        Create dict that will be eventually used as Properties sent to the driver. The default implementation
        fills in `user` and `password` properties.

        If concrete database connector has some specific properties that it allows to set, it should override
        this method, get default properties and enrich them with database specific stuff.

        :return: dict representing Properties that will be sent over to the driver
        """
        return dict(user=self.user, password=self.password)

    def connect(self) -> jaydebeapi.Connection:
        logger.info("connecting to %s using %s", self.connection_string, self._classname)

        return jaydebeapi.connect(
            jclassname=self._classname,
            url=self.connection_string,
            driver_args=self.create_properties(),
            jars=self.driver_path,
        )

    def metadata(
        self,
        row_transformer=MetadataRowTransformer(),
        capabilities: Optional[CapabilitySnapshot] = None,
        string_encoder: Optional[Callable[[str], Any]] = None,
    ) -> "DbMetadata":
        """
        Access catalog metadata of the database in canonical shape.

        Use the returned object as a resource:
        >>> with connector.metadata() as md:
        >>>     for table in md.get_tables():
        >>>         # do something with the table
        >>>         pass

        :param row_transformer: optionally specify row transformer to use when reading the different metadata entries
        :param capabilities: optionally specify capabilities of the engine; by default they are derived from the
         database version reported by the driver
        :param string_encoder: optionally specify function to encode string values in rows
        :return: metadata bound to a new connection; the connection is closed when leaving the context
        """
        return DbMetadata(
            conn=self.connect(),
            row_transformer=row_transformer,
            capabilities=capabilities,
            catalog_as_package=self.catalog_as_package,
            string_encoder=string_encoder,
        )


def _convert_to_python(val):
    """
    Query results may contain java types that will not be picked up and auto-converted by jaydebeapi.
    Long, Integer, Short, BigInteger and JLong encountered so far.

    Keeping java types around creates problems down the line because various python built-ins or third party
    code is not prepared to handle these types.

    :param val: value to convert
    :return: python value
    :raises TypeError: when encountering java type that cannot be converted
    """
    t = str(type(val))

    if "java.lang.Integer" in t or "java.lang.Short" in t:
        return int(val.intValue())
    elif "java.lang.Long" in t:
        return int(val.longValue())
    elif "java.lang.Boolean" in t:
        return bool(val.booleanValue())
    elif "java.math.BigInteger" in t:
        return int(val.toString())
    elif "java.math.BigDecimal" in t:
        return val.toString()
    elif "JLong" in t or "JInt" in t or "JShort" in t:
        return int(val)
    elif "JBoolean" in t:
        return bool(val)
    elif "java" in t:
        logger.warning("unexpected java type in query result: %s", t)

        raise TypeError(f"unable to convert java type {t} to python")

    return val


class DbApiQueryRunner(MetadataQueryRunner):
    """
    Runs metadata queries on a DB-API connection with 'qmark' parameter style, such as jaydebeapi connections.
    Column labels of the results are upper cased.
    """

    def __init__(self, conn):
        self._conn = conn

    def execute(self, query: MetadataQuery) -> list[dict[str, Any]]:
        cursor = self._conn.cursor()

        try:
            cursor.execute(query.sql, list(query.parameters))
            labels = [description[0].upper() for description in cursor.description]

            return [dict(zip(labels, (_convert_to_python(col) for col in row))) for row in cursor.fetchall()]
        finally:
            cursor.close()


def read_capabilities(runner: MetadataQueryRunner, catalog_as_package: bool = False) -> CapabilitySnapshot:
    """
    Reads capabilities by asking the engine for its version.

    :param runner: runner to execute the query with
    :param catalog_as_package: whether the connection reports packages as catalogs
    :return: capability snapshot
    """
    records = list(runner.execute(_ENGINE_VERSION_QUERY))

    if not records:
        raise ValueError("engine did not report its version")

    return CapabilitySnapshot.from_engine_version(records[0]["ENGINE_VERSION"], catalog_as_package)


class DbMetadata(CatalogMetadata):
    def __init__(
        self,
        conn: jaydebeapi.Connection,
        row_transformer: MetadataRowTransformer = MetadataRowTransformer(),
        capabilities: Optional[CapabilitySnapshot] = None,
        catalog_as_package: bool = False,
        string_encoder: Optional[Callable[[str], Any]] = None,
        cache_size: int = DEFAULT_ENCODED_STRING_CACHE_SIZE,
    ):
        self._conn = conn
        self._product_info = None

        if capabilities is None:
            capabilities = CapabilitySnapshot.for_version(
                self.product_info.major_version,
                self.product_info.minor_version,
                catalog_as_package=catalog_as_package,
            )

        super(DbMetadata, self).__init__(
            query_runner=DbApiQueryRunner(conn),
            capabilities=capabilities,
            row_transformer=row_transformer,
            string_encoder=string_encoder,
            cache_size=cache_size,
        )
        logger.debug("catalog metadata using %s", capabilities)

    @property
    def product_info(self) -> MetadataProductInfo:
        """
        Gets information about the database product running on the server.

        :return: MetadataProductInfo
        :rtype: MetadataProductInfo
        """
        if self._product_info is None:
            md = self._conn.jconn.getMetaData()
            self._product_info = MetadataProductInfo(
                product_name=md.getDatabaseProductName(),
                product_version=md.getDatabaseProductVersion(),
                major_version=_convert_to_python(md.getDatabaseMajorVersion()),
                minor_version=_convert_to_python(md.getDatabaseMinorVersion()),
            )

        return self._product_info

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._conn.close()
