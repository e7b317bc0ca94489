# -*- coding: utf-8 -*-
"""
==============================================================================
=== PARTE 1: MOTOR DE CÁLCULO (GRATIFICACIÓN) ===
==============================================================================

Este archivo contiene toda la lógica pura de Python para el cálculo de la
gratificación semestral (Julio / Diciembre), la bonificación extraordinaria
y la proyección referencial de Renta de 5ta categoría.
No debe contener NINGUNA importación o código de Streamlit (st.).

Los montos se manejan con Decimal y se redondean a 2 decimales (ROUND_HALF_UP)
recién al armar el resultado, cada uno por separado.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Tuple, Union

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

Numero = Union[int, float, str, Decimal]

# --- 1. CONSTANTES GLOBALES ---

# Valor de la UIT usado para los tramos de Renta 5ta
UIT = Decimal("5150")
# Remuneración Mínima Vital
MINIMUM_WAGE = Decimal("1025")
# Ley N° 25129
FAMILY_ALLOWANCE_RATE = Decimal("0.10")
FAMILY_ALLOWANCE_AMOUNT = MINIMUM_WAGE * FAMILY_ALLOWANCE_RATE

# Art. 2, Ley N° 27735 (la gratificación equivale a una remuneración por semestre)
SEMESTER_MONTHS = 6

# Ley N° 30334 (Bonificación extraordinaria por aporte de salud no efectuado)
BONI_LEY_ESSALUD = Decimal("0.09")
BONI_LEY_EPS = Decimal("0.0675")

# Art. 57, D.S. N° 013-2013-PRODUCE (REMYPE): la pequeña empresa paga media gratificación
FACTOR_PEQUENA_EMPRESA = Decimal("0.5")

# Proyección anual: 12 sueldos + 2 gratificaciones
MESES_PROYECCION_ANUAL = 14

# Deducción de 7 UIT (Art. 46, TUO LIR)
DEDUCCION_7_UIT = 7 * UIT

# Art. 53, D.S. N° 179-2004-EF (TUO Ley Impuesto a la Renta)
TRAMOS_IR: List[Tuple[Decimal, Decimal]] = [
    (5 * UIT, Decimal("0.08")),   # Hasta 25,750
    (20 * UIT, Decimal("0.14")),  # Hasta 103,000
    (35 * UIT, Decimal("0.17")),  # Hasta 180,250
    (45 * UIT, Decimal("0.20")),  # Hasta 231,750
    (Decimal("Infinity"), Decimal("0.30")),  # Más de 231,750
]

CENTIMOS = Decimal("0.01")


# ==============================================================================
# --- 2. CLASES DE DATOS (DATACLASSES) ---
# ==============================================================================

class TipoSeguro(Enum):
    ESSALUD = "EsSalud"
    EPS = "EPS"


class PeriodoGratificacion(Enum):
    JULIO = "Julio"
    DICIEMBRE = "Diciembre"


TASA_BONIFICACION = {
    TipoSeguro.ESSALUD: BONI_LEY_ESSALUD,
    TipoSeguro.EPS: BONI_LEY_EPS,
}


@dataclass(frozen=True)
class EntradaGratificacion:
    """Datos ya validados que llegan desde el formulario."""
    salary: Decimal
    months_worked: int
    insurance_type: TipoSeguro = TipoSeguro.ESSALUD
    has_family_allowance: bool = False
    is_small_company: bool = False
    has_bonuses: bool = False
    bonus_amount: Decimal = Decimal("0")
    has_overtime: bool = False
    overtime_amount: Decimal = Decimal("0")
    should_calculate_tax: bool = False


@dataclass(frozen=True)
class ResultadoGratificacion:
    """Totales a pagar y desglose de la remuneración computable."""
    # Totales
    base_gratificacion: Decimal
    bonus: Decimal
    gross_total_gratificacion: Decimal
    income_tax: Decimal
    net_total_gratificacion: Decimal
    # Desglose
    salary_input: Decimal
    family_allowance_val: Decimal
    avg_bonuses_val: Decimal
    avg_overtime_val: Decimal
    total_computation_base: Decimal
    regime_computation_base: Decimal  # con la reducción REMYPE, si aplica
    insurance_rate: Decimal
    months_worked: int
    is_small_company: bool


# ==============================================================================
# --- 3. FUNCIONES AUXILIARES ---
# ==============================================================================

def a_decimal(valor: Numero) -> Decimal:
    """Convierte un número a Decimal sin arrastrar el error binario del float."""
    if isinstance(valor, Decimal):
        return valor
    if isinstance(valor, float):
        return Decimal(str(valor))
    return Decimal(valor)


def redondear(valor: Numero) -> Decimal:
    """Redondea a céntimos (ROUND_HALF_UP)."""
    return a_decimal(valor).quantize(CENTIMOS, rounding=ROUND_HALF_UP)


def calcular_remuneracion_computable(entrada: EntradaGratificacion) -> Tuple[Decimal, Decimal, Decimal, Decimal]:
    """
    Suma los conceptos que integran la remuneración computable.
    Base Legal: Art. 1 y 2, D.S. N° 005-2002-TR (promedio de lo percibido
    en el semestre para conceptos variables).

    Devuelve (total, asignación familiar, promedio de bonos, promedio de horas extras).
    """
    asignacion = FAMILY_ALLOWANCE_AMOUNT if entrada.has_family_allowance else Decimal("0")
    promedio_bonos = a_decimal(entrada.bonus_amount) / SEMESTER_MONTHS if entrada.has_bonuses else Decimal("0")
    promedio_sobretiempo = a_decimal(entrada.overtime_amount) / SEMESTER_MONTHS if entrada.has_overtime else Decimal("0")

    total = a_decimal(entrada.salary) + asignacion + promedio_bonos + promedio_sobretiempo
    return total, asignacion, promedio_bonos, promedio_sobretiempo


def calcular_impuesto_anual_por_tramos(renta_neta_imponible_anual: Numero) -> Decimal:
    """Calcula el impuesto anual recorriendo los tramos acumulativos del Art. 53 LIR."""
    renta_neta = a_decimal(renta_neta_imponible_anual)
    impuesto_anual = Decimal("0")
    renta_acumulada_para_tramos = Decimal("0")

    for limite, tasa in TRAMOS_IR:
        monto_en_tramo = min(renta_neta - renta_acumulada_para_tramos, limite - renta_acumulada_para_tramos)
        if monto_en_tramo <= 0:
            break
        impuesto_anual += monto_en_tramo * tasa
        renta_acumulada_para_tramos += monto_en_tramo

    return impuesto_anual


def calcular_tasa_efectiva(remuneracion_computable: Numero) -> Decimal:
    """
    Proyecta el ingreso anual (14 remuneraciones, sin la reducción REMYPE),
    descuenta 7 UIT y devuelve impuesto proyectado / ingreso proyectado.
    """
    proyectado_anual = a_decimal(remuneracion_computable) * MESES_PROYECCION_ANUAL
    if proyectado_anual <= 0:
        return Decimal("0")

    base_imponible = max(Decimal("0"), proyectado_anual - DEDUCCION_7_UIT)
    impuesto_anual_proyectado = calcular_impuesto_anual_por_tramos(base_imponible)
    return impuesto_anual_proyectado / proyectado_anual


# ==============================================================================
# --- 4. FUNCIÓN PRINCIPAL ---
# ==============================================================================

def calcular_gratificacion(entrada: EntradaGratificacion) -> ResultadoGratificacion:
    """
    Calcula la gratificación semestral (Julio o Diciembre) y su bonificación.
    Base Legal: Ley N° 27735 y Ley N° 30334.

    La gratificación está inafecta a Renta 5ta en esta aproximación: la tasa
    efectiva proyectada se aplica sólo sobre la bonificación extraordinaria.
    """
    total_base, asignacion, promedio_bonos, promedio_sobretiempo = calcular_remuneracion_computable(entrada)

    base_para_calculo = total_base
    if entrada.is_small_company:
        base_para_calculo = base_para_calculo * FACTOR_PEQUENA_EMPRESA

    base_gratificacion = base_para_calculo * entrada.months_worked / SEMESTER_MONTHS

    tasa_bonificacion = TASA_BONIFICACION[entrada.insurance_type]
    bonificacion = base_gratificacion * tasa_bonificacion

    total_bruto = base_gratificacion + bonificacion
    impuesto = Decimal("0")
    total_neto = total_bruto

    if entrada.should_calculate_tax:
        tasa_efectiva = calcular_tasa_efectiva(total_base)
        impuesto = bonificacion * tasa_efectiva
        total_neto = total_bruto - impuesto
        logger.debug("Tasa efectiva proyectada: %s", tasa_efectiva)

    logger.debug(
        "Gratificación calculada: base=%s meses=%s seguro=%s",
        total_base, entrada.months_worked, entrada.insurance_type.value,
    )

    return ResultadoGratificacion(
        base_gratificacion=redondear(base_gratificacion),
        bonus=redondear(bonificacion),
        gross_total_gratificacion=redondear(total_bruto),
        income_tax=redondear(impuesto),
        net_total_gratificacion=redondear(total_neto),
        salary_input=a_decimal(entrada.salary),
        family_allowance_val=redondear(asignacion),
        avg_bonuses_val=redondear(promedio_bonos),
        avg_overtime_val=redondear(promedio_sobretiempo),
        total_computation_base=redondear(total_base),
        regime_computation_base=redondear(base_para_calculo),
        insurance_rate=tasa_bonificacion,
        months_worked=entrada.months_worked,
        is_small_company=entrada.is_small_company,
    )


# ==============================================================================
# --- 5. MESES COMPUTABLES DEL SEMESTRE ---
# ==============================================================================

def fecha_corte_gratificacion(periodo: PeriodoGratificacion, anio: int) -> date:
    """Último día del semestre que se paga en Julio (30/06) o Diciembre (31/12)."""
    if periodo == PeriodoGratificacion.JULIO:
        return date(anio, 6, 30)
    return date(anio, 12, 31)


def calcular_meses_completos(fecha_ingreso: date, fecha_corte: date) -> int:
    """
    Meses calendario completos laborados dentro del semestre de 'fecha_corte'.
    Base Legal: Art. 3, D.S. N° 005-2002-TR (sólo se computan meses completos).
    """
    if 1 <= fecha_corte.month <= 6:
        inicio_semestre = date(fecha_corte.year, 1, 1)
    else:
        inicio_semestre = date(fecha_corte.year, 7, 1)

    inicio = max(fecha_ingreso, inicio_semestre)
    if inicio > fecha_corte:
        return 0

    # El día de corte es inclusivo
    delta = relativedelta(fecha_corte + timedelta(days=1), inicio)
    meses_completos = delta.years * 12 + delta.months
    return max(0, min(SEMESTER_MONTHS, meses_completos))
