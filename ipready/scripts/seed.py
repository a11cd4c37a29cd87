"""
Load demo proteins, processes, evidence and documents from a JSON file.

Usage:
    ipready-seed [path/to/seed.json]
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

import aiofiles
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ipready.core.logging_conf import setup_logging
from ipready.db.session import AsyncSessionLocal, init_models
from ipready.db.models.protein import Protein
from ipready.db.models.process import Process, ProteinProcess
from ipready.db.models.evidence import Evidence
from ipready.db.models.document import Document

DEFAULT_SEED_FILE = Path(__file__).resolve().parents[1] / "data" / "seed.json"


async def load_seed_file(path: Path) -> Dict[str, Any]:
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        raw = await f.read()
    return json.loads(raw)


async def seed_database(session: AsyncSession, data: Dict[str, Any]) -> Dict[str, int]:
    """
    Insert the seed payload. Proteins reference processes by name; evidence
    and documents are nested under their protein. ``unlinked_documents`` are
    stored without a protein.
    """
    processes = {}
    for item in data.get("processes", []):
        process = Process(
            name=item["name"],
            description=item.get("description"),
            type=item.get("type")
        )
        session.add(process)
        processes[process.name] = process

    counts = {"processes": len(processes), "proteins": 0, "links": 0, "evidence": 0, "documents": 0}

    for item in data.get("proteins", []):
        protein = Protein(
            name=item["name"],
            sequence=item.get("sequence"),
            maturity=item.get("maturity")
        )
        session.add(protein)
        counts["proteins"] += 1

        for link in item.get("processes", []):
            if link["process"] not in processes:
                raise ValueError(f"Protein {protein.name} links unknown process {link['process']!r}")
            protein.processes.append(ProteinProcess(
                process=processes[link["process"]],
                yield_percent=link.get("yield_percent"),
                conditions=link.get("conditions")
            ))
            counts["links"] += 1

        for evidence in item.get("evidence", []):
            protein.evidence.append(Evidence(
                type=evidence["type"],
                description=evidence["description"],
                confidence=evidence.get("confidence")
            ))
            counts["evidence"] += 1

        for document in item.get("documents", []):
            protein.documents.append(_document(document))
            counts["documents"] += 1

    for document in data.get("unlinked_documents", []):
        session.add(_document(document))
        counts["documents"] += 1

    await session.commit()
    return counts


def _document(item: Dict[str, Any]) -> Document:
    content = item["content"]
    return Document(
        filename=item["filename"],
        content=content,
        mime_type=item.get("mime_type", "text/plain"),
        file_size=item.get("file_size", len(content.encode("utf-8")))
    )


async def run(path: Path):
    logger.info(f"Seeding database from {path}")
    await init_models()
    data = await load_seed_file(path)
    async with AsyncSessionLocal() as session:
        counts = await seed_database(session, data)
    logger.info(f"Seed completed: {counts}")


def main():
    setup_logging()
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED_FILE
    try:
        asyncio.run(run(path))
    except Exception as e:
        logger.error(f"Seed failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
