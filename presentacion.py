# -*- coding: utf-8 -*-
"""
Helpers de presentación: formato de moneda, filas del resultado y tabla de
desglose. Sin código de Streamlit, para poder probarlos por separado.
"""

from __future__ import annotations
from typing import List, NamedTuple, Optional

import pandas as pd

from motor import (
    FAMILY_ALLOWANCE_AMOUNT,
    ResultadoGratificacion,
    TipoSeguro,
    a_decimal,
    redondear,
)

TITULO_SIN_RESULTADO = "Tu resultado aparecerá aquí"
TEXTO_SIN_RESULTADO = "Completa los datos en el formulario para calcular tu gratificación."

NOTA_REFERENCIAL = (
    "**Nota:** Esta es una calculadora referencial. El monto puede variar por "
    "otros factores como el régimen de la empresa."
)

# Textos de ayuda que aparecen al activar cada opción
INFO_ASIGNACION_FAMILIAR = (
    f"Se suma a tu sueldo base. Equivale al 10% del sueldo mínimo "
    f"(S/ {FAMILY_ALLOWANCE_AMOUNT:,.2f}) y se añade a la base de cálculo."
)
INFO_PEQUENA_EMPRESA = (
    "Tu gratificación calculada se divide a la mitad. Aplica a empresas acreditadas en REMYPE."
)
INFO_BONOS = (
    "El promedio de tus bonos en el semestre se suma a la base de cálculo. "
    "No incluyas bonos extraordinarios."
)
INFO_HORAS_EXTRAS = (
    "Si la respuesta es sí, activa esta opción e ingresa el monto total que "
    "recibiste por horas extras en los últimos 6 meses."
)
INFO_RENTA = (
    "La gratificación está exonerada, pero la bonificación no. Este es un cálculo "
    "proyectado para estimar la retención sobre tu bonificación."
)
INFO_SEGURO = {
    TipoSeguro.ESSALUD: (
        "Recibirás una bonificación extraordinaria del **9%** sobre tu gratificación, "
        "correspondiente al aporte a EsSalud que el empleador deja de hacer."
    ),
    TipoSeguro.EPS: (
        "Recibirás una bonificación extraordinaria del **6.75%** sobre tu gratificación. "
        "Este es el porcentaje que tu empleador aporta a EsSalud por ti."
    ),
}


class FilaResultado(NamedTuple):
    etiqueta: str
    valor: str
    es_total: bool = False
    es_descuento: bool = False


def formatear_moneda(valor) -> str:
    """Formato en soles: 'S/ 1,234.56' (negativos como '-S/ 12.00')."""
    monto = redondear(valor)
    signo = "-" if monto < 0 else ""
    return f"{signo}S/ {abs(monto):,.2f}"


def formatear_tasa(tasa) -> str:
    """0.0675 -> '6.75%'."""
    porcentaje = (a_decimal(tasa) * 100).normalize()
    return f"{porcentaje:f}%"


def filas_resultado(resultado: Optional[ResultadoGratificacion]) -> List[FilaResultado]:
    """
    Filas del panel de resultados. Si hay renta retenida se muestra el bruto,
    el descuento y el neto; si no, un único 'Total a Recibir'.
    """
    if resultado is None:
        return []

    filas = [
        FilaResultado("Gratificación Base", formatear_moneda(resultado.base_gratificacion)),
        FilaResultado("Bonificación Extraordinaria", formatear_moneda(resultado.bonus)),
    ]
    if resultado.income_tax > 0:
        filas.extend([
            FilaResultado("Total Bruto", formatear_moneda(resultado.gross_total_gratificacion)),
            FilaResultado(
                "Imp. a la Renta (5ta Cat.)",
                f"- {formatear_moneda(resultado.income_tax)}",
                es_descuento=True,
            ),
            FilaResultado(
                "Total Neto a Recibir",
                formatear_moneda(resultado.net_total_gratificacion),
                es_total=True,
            ),
        ])
    else:
        filas.append(
            FilaResultado("Total a Recibir", formatear_moneda(resultado.gross_total_gratificacion), es_total=True)
        )
    return filas


def tabla_desglose(resultado: ResultadoGratificacion) -> pd.DataFrame:
    """Desglose de la remuneración computable y los parámetros aplicados."""
    filas = [
        ("Sueldo Mensual Bruto", formatear_moneda(resultado.salary_input)),
        ("Asignación Familiar", formatear_moneda(resultado.family_allowance_val)),
        ("Promedio de Bonos / Comisiones", formatear_moneda(resultado.avg_bonuses_val)),
        ("Promedio de Horas Extras", formatear_moneda(resultado.avg_overtime_val)),
        ("Remuneración Computable", formatear_moneda(resultado.total_computation_base)),
    ]
    if resultado.is_small_company:
        filas.append(("Base Pequeña Empresa (50%)", formatear_moneda(resultado.regime_computation_base)))
    meses_texto = f"{resultado.months_worked} mes{'es' if resultado.months_worked != 1 else ''}"
    filas.extend([
        ("Meses Computables", meses_texto),
        ("Tasa de Bonificación", formatear_tasa(resultado.insurance_rate)),
    ])
    return pd.DataFrame(filas, columns=["Concepto", "Monto"])
