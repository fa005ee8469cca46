"""Módulo que depende de um pacote não instalado."""

import callbind_missing_dependency_for_tests  # noqa: F401


class Thing:
    pass
