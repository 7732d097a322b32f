"""Catalog of known release trains."""

from __future__ import annotations

from rt.model.project import (
    BUILD,
    CASSANDRA,
    COMMONS,
    COUCHBASE,
    ELASTICSEARCH,
    ENVERS,
    GEMFIRE,
    JPA,
    KEY_VALUE,
    LDAP,
    MONGO_DB,
    NEO4J,
    REDIS,
    REST,
    SOLR,
)
from rt.model.train import Module, Train, Transition

__all__ = [
    "CODD",
    "DIJKSTRA",
    "EVANS",
    "FOWLER",
    "GOSLING",
    "HOPPER",
    "INGALLS",
    "TRAINS",
    "train_by_name",
]

CODD = Train.of(
    "Codd",
    Module.of(BUILD, "1.3"),
    Module.of(COMMONS, "1.7"),
    Module.of(JPA, "1.5"),
    Module.of(MONGO_DB, "1.4"),
    Module.of(NEO4J, "3.0"),
    Module.of(SOLR, "1.1"),
    Module.of(REST, "2.0"),
)

DIJKSTRA = Train.of(
    "Dijkstra",
    Module.of(BUILD, "1.4"),
    Module.of(COMMONS, "1.8"),
    Module.of(JPA, "1.6"),
    Module.of(MONGO_DB, "1.5"),
    Module.of(NEO4J, "3.1"),
    Module.of(SOLR, "1.2"),
    Module.of(COUCHBASE, "1.1"),
    Module.of(CASSANDRA, "1.0"),
    Module.of(ELASTICSEARCH, "1.0", "M2"),
    Module.of(GEMFIRE, "1.4"),
    Module.of(REDIS, "1.3"),
    Module.of(REST, "2.1"),
)

EVANS = DIJKSTRA.next("Evans", Transition.MINOR)
FOWLER = EVANS.next("Fowler", Transition.MINOR)
GOSLING = FOWLER.next("Gosling", Transition.MINOR, Module.of(KEY_VALUE, "1.0"))
HOPPER = GOSLING.next(
    "Hopper",
    Transition.MINOR,
    Module.of(SOLR, "2.0"),
    Module.of(ENVERS, "1.0"),
    Module.of(NEO4J, "4.1"),
    Module.of(COUCHBASE, "2.1"),
    Module.of(ELASTICSEARCH, "2.0"),
)
INGALLS = HOPPER.next("Ingalls", Transition.MINOR, Module.of(LDAP, "1.0"))

TRAINS: tuple[Train, ...] = (CODD, DIJKSTRA, EVANS, FOWLER, GOSLING, HOPPER, INGALLS)


def train_by_name(name: str) -> Train | None:
    """Case-insensitive lookup."""
    wanted = name.strip().lower()
    for train in TRAINS:
        if train.name.lower() == wanted:
            return train
    return None
