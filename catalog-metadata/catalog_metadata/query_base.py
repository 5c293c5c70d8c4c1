# (C) 2021 GoodData Corporation
import logging
from collections import namedtuple
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause, conjunction, parameters
from catalog_metadata.errors import CatalogMetadataError
from catalog_metadata.rows import RowAssembler

logger = logging.getLogger(__name__)

MetadataQuery = namedtuple("MetadataQuery", ["sql", "parameters"])
"""
SQL text of a metadata query with '?' placeholders and the list of values to bind to them, in order.
"""

StrategyKey = tuple[Generation, bool]

ClauseFactory = Callable[..., list[Clause]]
"""
Creates clauses from the patterns passed to an operation; the clauses are joined with 'and' in the given order.
"""

RowMapper = Callable[[Mapping[str, Any], RowAssembler, CapabilitySnapshot], tuple]
"""
Maps one record of the metadata query onto a canonical row using the provided assembler.
"""


class MetadataQueryRunner:
    """
    Executes metadata queries on behalf of CatalogMetadata. Implementations return an iterable of records; each
    record is a mapping of upper case column label to value. Errors raised by the runner are propagated as-is.
    """

    def execute(self, query: MetadataQuery) -> Iterable[Mapping[str, Any]]:
        raise NotImplementedError()


@dataclass(frozen=True)
class VersionedQueryStrategy:
    """
    Implementation of one metadata operation for one generation of the system tables. Strategies are stateless;
    the same instance serves all calls of the operation on connections of the same generation.
    """

    name: str
    generation: Generation
    row_type: type
    select: str
    """select list and from clause of the query, without where"""
    order_by: str
    clauses: ClauseFactory
    map_row: RowMapper
    catalog_as_package: bool = False

    def build_query(self, *args, **kwargs) -> MetadataQuery:
        """
        Builds query for the operation; all arguments are passed to the clause factory of this strategy.

        :return: query with parameters derived from the same list of clauses used to build the where clause
        """
        clauses = self.clauses(*args, **kwargs)
        sql = self.select

        if any(clause.has_condition() for clause in clauses):
            sql += "\nwhere " + conjunction(clauses)

        sql += "\norder by " + self.order_by

        return MetadataQuery(sql=sql, parameters=parameters(clauses))


class StrategyTable:
    """
    Strategies of one metadata operation keyed by generation and by whether packages are reported as catalogs.

    Selection is a pure function of the capability snapshot: the strategy of the newest generation that is not
    newer than the engine. Strategies are instantiated on first selection and reused afterwards.
    """

    def __init__(self, name: str, factories: Mapping[StrategyKey, Callable[[], VersionedQueryStrategy]]):
        self._name = name
        self._factories = dict(factories)
        self._package_aware = any(catalog_as_package for _, catalog_as_package in self._factories)
        self._instances: dict[StrategyKey, VersionedQueryStrategy] = {}

    @property
    def name(self) -> str:
        return self._name

    def key_for(self, capabilities: CapabilitySnapshot) -> StrategyKey:
        catalog_as_package = self._package_aware and capabilities.uses_catalog_as_package
        generations = sorted(
            (generation for generation, as_package in self._factories if as_package == catalog_as_package),
            reverse=True,
        )

        if not generations:
            raise CatalogMetadataError(f"no {self._name} strategy for {capabilities}")

        for generation in generations:
            if generation <= capabilities.generation:
                return generation, catalog_as_package

        # engine older than any strategy, use the oldest one
        return generations[-1], catalog_as_package

    def select(self, capabilities: CapabilitySnapshot) -> VersionedQueryStrategy:
        key = self.key_for(capabilities)
        strategy = self._instances.get(key)

        if strategy is None:
            strategy = self._factories[key]()
            self._instances[key] = strategy
            logger.debug("created %s strategy %s for %s", self._name, strategy.generation.name, capabilities)

        return strategy


def run_strategy(
    runner: MetadataQueryRunner,
    strategy: VersionedQueryStrategy,
    capabilities: CapabilitySnapshot,
    assembler: RowAssembler,
    *args,
    **kwargs,
) -> list:
    """
    Builds the query of the strategy, executes it and maps all records onto canonical rows.

    :param runner: runner to execute the query with
    :param strategy: strategy of the operation
    :param capabilities: capabilities of the engine
    :param assembler: assembler for the rows of the strategy
    :return: list of canonical rows in the order returned by the query
    """
    query = strategy.build_query(*args, **kwargs)
    logger.debug(
        "running %s query (%s): %s; parameters: %s",
        strategy.name,
        strategy.generation.name,
        query.sql,
        query.parameters,
    )

    return [strategy.map_row(record, assembler, capabilities) for record in runner.execute(query)]
