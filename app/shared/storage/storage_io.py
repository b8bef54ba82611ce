# -*- coding: utf-8 -*-
"""
backend/app/shared/storage/storage_io.py

Servicio de almacenamiento de documentos del expediente.

El backend nunca interpreta el contenido: `store` recibe bytes y devuelve
una referencia opaca (`ruta_archivo`) que luego se usa con `retrieve`.

Backends:
    - LocalDocumentStorage: filesystem (STORAGE_BASE_DIR), I/O async con anyio

Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID, uuid4

import anyio

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(Exception):
    """Error de lectura/escritura en storage."""


@dataclass(frozen=True)
class StoredFileMetadata:
    nombre: str
    mime_type: str
    thesis_id: Optional[UUID] = None
    tipo_documento: Optional[str] = None


class IDocumentStorage(Protocol):
    async def store(self, data: bytes, metadata: StoredFileMetadata) -> str: ...
    async def retrieve(self, ref: str) -> bytes: ...


def sanitize_filename(nombre: str) -> str:
    """Nombre seguro para filesystem (sin rutas ni caracteres raros)."""
    base = nombre.replace("\\", "/").rsplit("/", 1)[-1].strip()
    base = _SAFE_NAME.sub("_", base).strip("._")
    return base[:120] or "documento"


class LocalDocumentStorage:
    """
    Storage en filesystem local.

    Referencia: "<thesis_id>/<tipo>/<uuid>_<nombre>" relativa a base_dir.
    """

    def __init__(self, base_dir: str):
        self.base_dir = anyio.Path(base_dir)

    def build_ref(self, metadata: StoredFileMetadata) -> str:
        parts = [
            str(metadata.thesis_id) if metadata.thesis_id else "sin_tesis",
            (metadata.tipo_documento or "otros").lower(),
            f"{uuid4().hex}_{sanitize_filename(metadata.nombre)}",
        ]
        return "/".join(parts)

    def _resolve(self, ref: str) -> anyio.Path:
        if not ref or ref.startswith("/") or ".." in ref.split("/"):
            raise StorageError(f"Referencia de storage inválida: {ref!r}")
        return self.base_dir / ref

    async def store(self, data: bytes, metadata: StoredFileMetadata) -> str:
        ref = self.build_ref(metadata)
        path = self._resolve(ref)
        try:
            await path.parent.mkdir(parents=True, exist_ok=True)
            await path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"No se pudo guardar el documento: {e}") from e
        logger.info("storage_store ref=%s bytes=%d", ref, len(data))
        return ref

    async def retrieve(self, ref: str) -> bytes:
        path = self._resolve(ref)
        if not await path.exists():
            raise FileNotFoundError(ref)
        return await path.read_bytes()

    async def exists(self, ref: str) -> bool:
        try:
            return await self._resolve(ref).exists()
        except StorageError:
            return False


def get_document_storage() -> IDocumentStorage:
    """Storage según STORAGE_BASE_DIR."""
    from app.shared.config import get_settings
    return LocalDocumentStorage(get_settings().storage_base_dir)


__all__ = [
    "StorageError",
    "StoredFileMetadata",
    "IDocumentStorage",
    "LocalDocumentStorage",
    "sanitize_filename",
    "get_document_storage",
]

# Fin del archivo backend/app/shared/storage/storage_io.py
