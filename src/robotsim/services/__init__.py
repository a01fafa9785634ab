"""Service layer — command objects, parsing, and orchestration returning ServiceResult.

Services may import from the domain layer.
They must never import from infrastructure, commands, or output.
"""
