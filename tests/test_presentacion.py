from decimal import Decimal

import pandas as pd
import pytest

from motor import EntradaGratificacion, TipoSeguro, calcular_gratificacion
from presentacion import (
    INFO_SEGURO,
    filas_resultado,
    formatear_moneda,
    formatear_tasa,
    tabla_desglose,
)


@pytest.mark.parametrize("valor, esperado", [
    (Decimal("3270"), "S/ 3,270.00"),
    (Decimal("42.1875"), "S/ 42.19"),
    (0, "S/ 0.00"),
    (1234567.891, "S/ 1,234,567.89"),
    (Decimal("-12"), "-S/ 12.00"),
])
def test_formatear_moneda(valor, esperado):
    assert formatear_moneda(valor) == esperado


def test_formatear_tasa():
    assert formatear_tasa(Decimal("0.09")) == "9%"
    assert formatear_tasa(Decimal("0.0675")) == "6.75%"


def test_sin_resultado_no_hay_filas():
    assert filas_resultado(None) == []


def test_filas_sin_renta_muestran_total_a_recibir():
    res = calcular_gratificacion(EntradaGratificacion(salary=Decimal("3000"), months_worked=6))
    filas = filas_resultado(res)
    assert [f.etiqueta for f in filas] == [
        "Gratificación Base",
        "Bonificación Extraordinaria",
        "Total a Recibir",
    ]
    assert filas[-1].valor == "S/ 3,270.00"
    assert filas[-1].es_total


def test_filas_con_renta_muestran_descuento_y_neto():
    res = calcular_gratificacion(EntradaGratificacion(
        salary=Decimal("10000"), months_worked=6, should_calculate_tax=True,
    ))
    filas = filas_resultado(res)
    etiquetas = [f.etiqueta for f in filas]
    assert etiquetas == [
        "Gratificación Base",
        "Bonificación Extraordinaria",
        "Total Bruto",
        "Imp. a la Renta (5ta Cat.)",
        "Total Neto a Recibir",
    ]
    renta = filas[3]
    assert renta.es_descuento
    assert renta.valor == "- S/ 83.81"
    assert filas[-1].valor == "S/ 10,816.19"


def test_renta_en_cero_se_muestra_como_total_unico():
    res = calcular_gratificacion(EntradaGratificacion(
        salary=Decimal("2000"), months_worked=6, should_calculate_tax=True,
    ))
    assert [f.etiqueta for f in filas_resultado(res)][-1] == "Total a Recibir"


def test_tabla_desglose():
    res = calcular_gratificacion(EntradaGratificacion(
        salary=Decimal("2500"), months_worked=3, is_small_company=True,
        insurance_type=TipoSeguro.EPS, has_family_allowance=True,
    ))
    tabla = tabla_desglose(res)
    assert isinstance(tabla, pd.DataFrame)
    assert list(tabla.columns) == ["Concepto", "Monto"]
    montos = dict(zip(tabla["Concepto"], tabla["Monto"]))
    assert montos["Asignación Familiar"] == "S/ 102.50"
    assert montos["Remuneración Computable"] == "S/ 2,602.50"
    assert montos["Base Pequeña Empresa (50%)"] == "S/ 1,301.25"
    assert montos["Meses Computables"] == "3 meses"
    assert montos["Tasa de Bonificación"] == "6.75%"


def test_tabla_desglose_sin_pequena_empresa():
    res = calcular_gratificacion(EntradaGratificacion(salary=Decimal("1500"), months_worked=1))
    tabla = tabla_desglose(res)
    assert "Base Pequeña Empresa (50%)" not in tabla["Concepto"].tolist()
    assert tabla["Monto"].tolist()[-2] == "1 mes"


def test_textos_de_seguro():
    assert "9%" in INFO_SEGURO[TipoSeguro.ESSALUD]
    assert "6.75%" in INFO_SEGURO[TipoSeguro.EPS]


def test_base_pequena_empresa_se_redondea_una_sola_vez():
    # 1000.005 / 2 = 500.0025 -> S/ 500.00 (no 500.01 desde la base ya redondeada)
    res = calcular_gratificacion(EntradaGratificacion(
        salary=Decimal("1000.005"), months_worked=6, is_small_company=True,
    ))
    assert res.total_computation_base == Decimal("1000.01")
    assert res.regime_computation_base == Decimal("500.00")
    montos = dict(zip(tabla_desglose(res)["Concepto"], tabla_desglose(res)["Monto"]))
    assert montos["Base Pequeña Empresa (50%)"] == "S/ 500.00"
