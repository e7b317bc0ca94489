# -*- coding: utf-8 -*-
"""
Lectura y validación de los campos del formulario.

Convierte los valores crudos de los widgets (texto, enteros, checkboxes) en
un EntradaGratificacion listo para el motor. Cualquier dato inválido se
reporta con ErrorValidacion y un mensaje para el usuario; el motor asume
que su entrada ya pasó por aquí.
"""

from __future__ import annotations
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from motor import EntradaGratificacion, SEMESTER_MONTHS, TipoSeguro, a_decimal

logger = logging.getLogger(__name__)

PATRON_NUMERICO = re.compile(r"^\d*\.?\d*$")

MSG_SUELDO_INVALIDO = "Por favor, ingrese un sueldo mensual válido."
MSG_MESES_INVALIDOS = "Seleccione entre 1 y 6 meses completos."
MSG_BONOS_INVALIDOS = "Por favor, ingrese un monto de bonos válido."
MSG_HORAS_EXTRAS_INVALIDAS = "Por favor, ingrese un monto de horas extras válido."
MSG_SEGURO_INVALIDO = "Seleccione un tipo de seguro de salud válido."
MSG_MONTO_EXCESIVO = "El monto ingresado excede el máximo permitido (S/ 999,999,999,999,999,999.99)."

# Tope de los montos: el redondeo a céntimos trabaja con 28 dígitos de precisión
MONTO_MAXIMO = Decimal("1E+18")


class ErrorValidacion(ValueError):
    """Dato del formulario que no puede enviarse al motor."""

    def __init__(self, mensaje: str, campo: str = None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.campo = campo


def es_entrada_numerica(texto: str) -> bool:
    """True si el texto es vacío o tiene forma de número sin signo (ej. '2500', '2500.5', '.5')."""
    return bool(PATRON_NUMERICO.match(texto or ""))


def parsear_monto(valor: Any) -> Optional[Decimal]:
    """Convierte texto o número a Decimal. Devuelve None si está vacío o no es numérico."""
    if valor is None:
        return None
    if isinstance(valor, bool):
        return None
    if isinstance(valor, (int, float, Decimal)):
        # Números ya tipados: '1e+16' es válido aunque no pase el filtro de texto
        monto = a_decimal(valor)
        return monto if monto.is_finite() else None

    texto = str(valor).strip()
    if not texto or texto == "." or not es_entrada_numerica(texto):
        return None
    try:
        return Decimal(texto)
    except InvalidOperation:
        return None


def parsear_meses(valor: Any) -> Optional[int]:
    """Convierte el selector de meses a entero."""
    if isinstance(valor, bool):
        return None
    try:
        return int(str(valor).strip())
    except (TypeError, ValueError):
        return None


def parsear_tipo_seguro(valor: Any) -> TipoSeguro:
    if isinstance(valor, TipoSeguro):
        return valor
    texto = str(valor or "").strip().lower()
    for tipo in TipoSeguro:
        if tipo.value.lower() == texto:
            return tipo
    raise ErrorValidacion(MSG_SEGURO_INVALIDO, campo="insurance_type")


def _rechazar(mensaje: str, campo: str) -> None:
    logger.info("Formulario rechazado (%s): %s", campo, mensaje)
    raise ErrorValidacion(mensaje, campo=campo)


def parsear_formulario(datos: Dict[str, Any]) -> EntradaGratificacion:
    """
    Valida el formulario completo.

    Reglas:
    - El sueldo es obligatorio y mayor a cero.
    - Los meses completos van de 1 a 6.
    - Si se activan bonos u horas extras, su monto total debe ser mayor a cero.
      Desactivados, su monto se ignora (se toma como 0).
    - Ningún monto llega a MONTO_MAXIMO.
    """
    sueldo = parsear_monto(datos.get("salary"))
    if sueldo is None or sueldo <= 0:
        _rechazar(MSG_SUELDO_INVALIDO, "salary")
    if sueldo >= MONTO_MAXIMO:
        _rechazar(MSG_MONTO_EXCESIVO, "salary")

    meses = parsear_meses(datos.get("months_worked"))
    if meses is None or not (1 <= meses <= SEMESTER_MONTHS):
        _rechazar(MSG_MESES_INVALIDOS, "months_worked")

    tiene_bonos = bool(datos.get("has_bonuses", False))
    monto_bonos = parsear_monto(datos.get("bonus_amount")) or Decimal("0")
    if tiene_bonos and monto_bonos <= 0:
        _rechazar(MSG_BONOS_INVALIDOS, "bonus_amount")
    if tiene_bonos and monto_bonos >= MONTO_MAXIMO:
        _rechazar(MSG_MONTO_EXCESIVO, "bonus_amount")

    tiene_horas_extras = bool(datos.get("has_overtime", False))
    monto_horas_extras = parsear_monto(datos.get("overtime_amount")) or Decimal("0")
    if tiene_horas_extras and monto_horas_extras <= 0:
        _rechazar(MSG_HORAS_EXTRAS_INVALIDAS, "overtime_amount")
    if tiene_horas_extras and monto_horas_extras >= MONTO_MAXIMO:
        _rechazar(MSG_MONTO_EXCESIVO, "overtime_amount")

    return EntradaGratificacion(
        salary=sueldo,
        months_worked=meses,
        insurance_type=parsear_tipo_seguro(datos.get("insurance_type", TipoSeguro.ESSALUD)),
        has_family_allowance=bool(datos.get("has_family_allowance", False)),
        is_small_company=bool(datos.get("is_small_company", False)),
        has_bonuses=tiene_bonos,
        bonus_amount=monto_bonos if tiene_bonos else Decimal("0"),
        has_overtime=tiene_horas_extras,
        overtime_amount=monto_horas_extras if tiene_horas_extras else Decimal("0"),
        should_calculate_tax=bool(datos.get("should_calculate_tax", False)),
    )
