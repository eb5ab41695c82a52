from fornecedor_api.persistence.repo import FornecedorRepository, commit_unit_of_work

__all__ = ["FornecedorRepository", "commit_unit_of_work"]
