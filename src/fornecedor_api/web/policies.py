"""
Authorization policies.

A named policy maps to the claim type a caller must carry. Only presence
is checked, never the claim value.
"""

from dataclasses import dataclass

EXCLUIR_FORNECEDOR = "ExcluirFornecedor"


@dataclass(frozen=True)
class Policy:
    name: str
    required_claim: str

    def evaluate(self, claims: dict[str, list[str]]) -> bool:
        return self.required_claim in claims


POLICIES: dict[str, Policy] = {
    EXCLUIR_FORNECEDOR: Policy(name=EXCLUIR_FORNECEDOR, required_claim=EXCLUIR_FORNECEDOR),
}


def get_policy(name: str) -> Policy:
    """Look up a registered policy. Raises KeyError for unknown names."""
    return POLICIES[name]
