# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Capabilities (Caps) of stream objects, as RDF triples.

Caps describe what a stream can do: which I/O contracts it satisfies and,
for buffer streams, its capacity and position. They are a small set of RDF
triples about one subject node, so they serialize to Turtle for free.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from rdflib import BNode, Graph, Literal, Namespace, URIRef
from rdflib.compare import isomorphic
from rdflib.namespace import DCTERMS, RDF, RDFS

from . import contracts
from .buffer import BufferStream

# Project Namespaces
PC = Namespace("urn:bufstream:caps#")
PARAM = Namespace("urn:bufstream:param:")
CONTRACT = Namespace("urn:bufstream:contract#")

PREFIXES = {"pc": PC, "param": PARAM, "contract": CONTRACT, "dcterms": DCTERMS}

READABLE = CONTRACT.Readable
WRITABLE = CONTRACT.Writable
SEEKABLE = CONTRACT.Seekable
READER_FROM = CONTRACT.ReaderFrom
WRITER_TO = CONTRACT.WriterTo
READER_AT = CONTRACT.ReaderAt
WRITER_AT = CONTRACT.WriterAt

# Contract URI -> protocol used to check it.
PROTOCOLS = {
    READABLE: contracts.Readable,
    WRITABLE: contracts.Writable,
    SEEKABLE: contracts.Seekable,
    READER_FROM: contracts.ReaderFrom,
    WRITER_TO: contracts.WriterTo,
    READER_AT: contracts.ReaderAt,
    WRITER_AT: contracts.WriterAt,
}

OCTET_STREAM = "application/octet-stream"


class Caps:
    """Capabilities of one stream, kept as triples about a single node.

    The node is ``pc:<name>`` when a name is given and a blank node
    otherwise. Contracts hang off it with ``pc:supports``. Params become
    ``param:<key>`` literals, except ``description`` which is the node's
    ``rdfs:comment``.
    """

    def __init__(
        self,
        media_type: str | None = None,
        name: str | None = None,
        params: dict[str, Any] | None = None,
        supports: Iterable[str] = (),
    ):
        self._graph = Graph()
        for prefix, namespace in PREFIXES.items():
            self._graph.bind(prefix, namespace)

        self._node = PC[name] if name else BNode()
        self._add(RDF.type, PC.Caps)
        if media_type:
            self._add(DCTERMS.format, Literal(media_type))
        if name:
            self._add(RDFS.label, Literal(name))
        for key, value in (params or {}).items():
            self._add(RDFS.comment if key == "description" else PARAM[key], Literal(value))
        for contract in supports:
            self._add(PC.supports, URIRef(contract))

    def _add(self, predicate: URIRef, obj: Literal | URIRef) -> None:
        self._graph.add((self._node, predicate, obj))

    def _text(self, predicate: URIRef) -> str | None:
        val = self._graph.value(self._node, predicate)
        return None if val is None else str(val)

    @property
    def media_type(self) -> str | None:
        return self._text(DCTERMS.format)

    @property
    def name(self) -> str | None:
        return self._text(RDFS.label)

    @property
    def contracts(self) -> frozenset[str]:
        """URIs of the contracts this stream satisfies."""
        return frozenset(str(o) for o in self._graph.objects(self._node, PC.supports))

    def supports(self, contract: str) -> bool:
        return (self._node, PC.supports, URIRef(contract)) in self._graph

    @property
    def params(self) -> dict[str, Any]:
        """Param values as Python objects, keyed by name."""
        p: dict[str, Any] = {}
        description = self._text(RDFS.comment)
        if description is not None:
            p["description"] = description
        for pred, obj in self._graph.predicate_objects(self._node):
            if not pred.startswith(PARAM):
                continue
            value = obj.toPython()
            p[pred[len(PARAM) :]] = str(value) if isinstance(value, Literal) else value
        return p

    def label(self) -> str:
        return self.name or self.media_type or "unknown"

    def __repr__(self) -> str:
        names = sorted(contract_name(c) for c in self.contracts)
        return f"Caps({self.label()!r}, contracts={names})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Caps):
            return NotImplemented
        return isomorphic(self._graph, other._graph)


def describe(stream: object) -> Caps:
    """Build Caps for any object by checking it against the stream contracts.

    The check is structural (method names only), as with any
    runtime_checkable protocol.
    """
    supported = [
        str(contract)
        for contract, protocol in PROTOCOLS.items()
        if isinstance(stream, protocol)
    ]
    if isinstance(stream, BufferStream):
        return Caps(
            media_type=OCTET_STREAM,
            name="BufferStream",
            params={
                "description": "Bounded stream over a fixed byte region.",
                "capacity": stream.capacity,
                "offset": stream.offset,
                "readonly": stream.content().readonly,
            },
            supports=supported,
        )
    return Caps(
        media_type=OCTET_STREAM,
        params={"type": type(stream).__name__},
        supports=supported,
    )


def contract_name(contract: str) -> str:
    """Return the short name of a contract URI (``Readable`` etc.)."""
    return str(contract).replace(str(CONTRACT), "")


def _curie(caps: Caps, term: Any) -> str:
    if isinstance(term, URIRef):
        return caps._graph.namespace_manager.normalizeUri(term)
    return str(term)


def caps_triples(caps: Caps) -> list[tuple[str, ...]]:
    """Export triples as string tuples, URIs shortened to CURIEs."""
    return [tuple(_curie(caps, term) for term in triple) for triple in caps._graph]


def caps_to_turtle(caps: Caps) -> str:
    """Serialize caps to Turtle format."""
    return caps._graph.serialize(format="turtle")


def summarize_caps(caps: Caps) -> str:
    """Return a JSON summary of the caps."""
    info: dict[str, Any] = {
        "media_type": caps.media_type,
        "name": caps.name,
        "contracts": sorted(contract_name(c) for c in caps.contracts),
    }
    for k, v in caps.params.items():
        if k not in info:
            info[k] = v
    return json.dumps(info, indent=2)
