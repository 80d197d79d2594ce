"""
minic: compiler from a small C-like language to stack-machine assembly.

Pipeline:
  parser: source -> AST (lark grammar)
  lower_to_vm: AST -> IR items (symbol slots, conditional labels)
  emitter: IR items -> program text (CALL entry ... HALT)
"""

__all__ = ["ast", "instructions", "ir", "labels", "symbols", "lower_to_vm", "emitter", "parser", "minicc"]
