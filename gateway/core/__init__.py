"""Core orchestration package.

Architectural role:
    Sits between the HTTP adapter and the lower-level subsystems (content
    assembly, upstream client, response extraction).

Composition:
    - `pipeline`: endpoint dispatch table and the validate -> assemble -> call ->
      extract sequence shared by every endpoint.

Determinism and side effects:
    Package import is side-effect free. The only runtime side effect of the
    pipeline is the upstream call performed through the injected client.
"""
