# -*- coding: utf-8 -*-
"""Configuración de logging de la aplicación (nivel vía GRATI_LOG_LEVEL)."""

import logging
import os

FORMATO_LOG = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configurar_logging(nivel: str = None) -> int:
    """
    Configura el logger raíz una sola vez y devuelve el nivel aplicado.
    Streamlit re-ejecuta el script en cada interacción, por eso no se
    agregan handlers si ya existen.
    """
    nivel = (nivel or os.getenv("GRATI_LOG_LEVEL", "INFO")).upper()
    nivel_numerico = logging.getLevelName(nivel)
    if not isinstance(nivel_numerico, int):
        nivel_numerico = logging.INFO

    raiz = logging.getLogger()
    if not raiz.handlers:
        logging.basicConfig(level=nivel_numerico, format=FORMATO_LOG)
    else:
        raiz.setLevel(nivel_numerico)
    return nivel_numerico
