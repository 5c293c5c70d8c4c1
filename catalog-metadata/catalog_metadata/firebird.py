# (C) 2021 GoodData Corporation
from catalog_metadata.connector import DbConnector


class FirebirdConnector(DbConnector):
    def __init__(
        self,
        connection_string=None,
        driver_path=None,
        user=None,
        password=None,
        use_catalog_as_package=False,
    ):
        super(FirebirdConnector, self).__init__(
            classname="org.firebirdsql.jdbc.FBDriver",
            connection_string=connection_string,
            driver_path=driver_path,
            user=user,
            password=password,
        )
        self._use_catalog_as_package = use_catalog_as_package

    @property
    def use_catalog_as_package(self) -> bool:
        return self._use_catalog_as_package

    @use_catalog_as_package.setter
    def use_catalog_as_package(self, val: bool):
        self._use_catalog_as_package = val

    @property
    def catalog_as_package(self) -> bool:
        return self._use_catalog_as_package

    def create_properties(self) -> dict[str, str]:
        properties = super(FirebirdConnector, self).create_properties()

        if self._use_catalog_as_package:
            properties["useCatalogAsPackage"] = "true"

        return properties
