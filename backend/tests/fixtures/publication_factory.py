"""Factory functions for creating test publication data."""

import random
from typing import Any

from models import Publication


def create_portal_item(
    numero_publicacao: Any = 123,
    texto_publicacao: str = "Processo julgado procedente.",
    tipo_decisao: str | None = "Sentença",
    tribunal_sigla: str | None = "TRE-SP",
    partes: list[dict[str, Any]] | None = None,
    data_publicacao: str = "2026-10-15",
    item_id: int | None = None,
    **overrides,
) -> dict[str, Any]:
    """
    Factory for one item of the portal's search response (Portuguese keys).

    Args:
        numero_publicacao: Publication number (dedup key)
        texto_publicacao: Decision body text
        tipo_decisao: Decision type name (None omits it)
        tribunal_sigla: Court acronym (None omits it)
        partes: Party list in portal shape (defaults to one party with one lawyer)
        data_publicacao: Publication date
        item_id: Portal id (defaults to random)
        **overrides: Override any field

    Returns:
        Dictionary shaped like the portal JSON
    """
    if partes is None:
        partes = [
            create_portal_party(
                "João Silva Neto",
                [create_portal_lawyer("Maria Souza", "12345", "SP")],
            )
        ]

    decisao: dict[str, Any] = {"partes": partes}
    if tipo_decisao is not None:
        decisao["tipoDecisao"] = {"nome": tipo_decisao}
    if tribunal_sigla is not None:
        decisao["usuario"] = {"instancia": {"tribunal": {"sigla": tribunal_sigla}}}

    item = {
        "id": item_id if item_id is not None else random.randint(1, 10_000_000),
        "numeroPublicacao": numero_publicacao,
        "dataPublicacao": data_publicacao,
        "textoPublicacao": texto_publicacao,
        "decisao": decisao,
        "fontePublicacao": {"nome": "Mural Eletrônico"},
    }
    item.update(overrides)
    return item


def create_portal_party(
    nome: str | None = "Parte Teste", advogados: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    return {"nome": nome, "advogados": advogados or []}


def create_portal_lawyer(
    nome: str | None = "Advogado Teste",
    numero: str | None = "1",
    uf: str | None = "SP",
) -> dict[str, Any]:
    lawyer: dict[str, Any] = {"nome": nome, "numero": numero}
    if uf is not None:
        lawyer["uf"] = {"sigla": uf}
    return lawyer


def create_test_publication(**kwargs) -> Publication:
    """Decoded Publication built from create_portal_item() arguments."""
    return Publication.from_portal_payload(create_portal_item(**kwargs))
