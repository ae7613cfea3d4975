"""Configuração do pytest para o endpoint de Flows."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ e tests/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
tests_path = Path(__file__).parent
for path in (src_path, tests_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(scope="session")
def rsa_private_key():
    """Chave RSA-2048 compartilhada (gerar por teste deixa a suíte lenta)."""
    from fakes.flow_envelopes import generate_rsa_key

    return generate_rsa_key(2048)
