from decimal import Decimal

import pytest

from formulario import (
    ErrorValidacion,
    MSG_BONOS_INVALIDOS,
    MSG_HORAS_EXTRAS_INVALIDAS,
    MSG_MESES_INVALIDOS,
    MSG_MONTO_EXCESIVO,
    MSG_SEGURO_INVALIDO,
    MSG_SUELDO_INVALIDO,
    es_entrada_numerica,
    parsear_formulario,
    parsear_monto,
)
from motor import TipoSeguro, calcular_gratificacion


def make_datos(**cambios):
    datos = {
        "salary": "2500",
        "months_worked": 6,
        "insurance_type": "EsSalud",
        "has_family_allowance": False,
        "is_small_company": False,
        "has_bonuses": False,
        "bonus_amount": "",
        "has_overtime": False,
        "overtime_amount": "",
        "should_calculate_tax": False,
    }
    datos.update(cambios)
    return datos


def test_formulario_valido():
    entrada = parsear_formulario(make_datos(
        salary=" 2500.50 ",
        months_worked="3",
        insurance_type="eps",
        is_small_company=True,
        should_calculate_tax=True,
    ))
    assert entrada.salary == Decimal("2500.50")
    assert entrada.months_worked == 3
    assert entrada.insurance_type is TipoSeguro.EPS
    assert entrada.is_small_company is True
    assert entrada.should_calculate_tax is True
    assert entrada.bonus_amount == Decimal("0")


@pytest.mark.parametrize("sueldo", ["", "   ", "abc", "0", "-100", "1e3", ".", None])
def test_sueldo_invalido(sueldo):
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(salary=sueldo))
    assert exc.value.mensaje == MSG_SUELDO_INVALIDO
    assert exc.value.campo == "salary"


@pytest.mark.parametrize("meses", [0, 7, "", "seis", None])
def test_meses_fuera_de_rango(meses):
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(months_worked=meses))
    assert str(exc.value) == MSG_MESES_INVALIDOS


@pytest.mark.parametrize("monto", ["", "0", "xyz"])
def test_bonos_activados_requieren_monto(monto):
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(has_bonuses=True, bonus_amount=monto))
    assert exc.value.mensaje == MSG_BONOS_INVALIDOS


def test_horas_extras_activadas_requieren_monto():
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(has_overtime=True, overtime_amount=""))
    assert exc.value.mensaje == MSG_HORAS_EXTRAS_INVALIDAS


def test_montos_desactivados_se_ignoran():
    entrada = parsear_formulario(make_datos(bonus_amount="900", overtime_amount="abc"))
    assert entrada.has_bonuses is False
    assert entrada.bonus_amount == Decimal("0")
    assert entrada.overtime_amount == Decimal("0")


def test_montos_activados_se_leen():
    entrada = parsear_formulario(make_datos(
        has_bonuses=True, bonus_amount="1200",
        has_overtime=True, overtime_amount="600.75",
    ))
    assert entrada.bonus_amount == Decimal("1200")
    assert entrada.overtime_amount == Decimal("600.75")


def test_seguro_desconocido():
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(insurance_type="SIS"))
    assert exc.value.mensaje == MSG_SEGURO_INVALIDO


def test_error_validacion_es_value_error():
    with pytest.raises(ValueError):
        parsear_formulario(make_datos(salary="0"))


@pytest.mark.parametrize("texto, esperado", [
    ("", True),
    ("2500", True),
    ("2500.", True),
    (".5", True),
    ("2500.50", True),
    ("2,500", False),
    ("-1", False),
    ("1.2.3", False),
    ("12a", False),
])
def test_es_entrada_numerica(texto, esperado):
    assert es_entrada_numerica(texto) is esperado


def test_parsear_monto_acepta_numeros():
    assert parsear_monto(1500) == Decimal("1500")
    assert parsear_monto(1500.25) == Decimal("1500.25")
    assert parsear_monto(Decimal("7")) == Decimal("7")
    assert parsear_monto(True) is None
    assert parsear_monto(Decimal("NaN")) is None


@pytest.mark.parametrize("campo, activar", [
    ("salary", None),
    ("bonus_amount", "has_bonuses"),
    ("overtime_amount", "has_overtime"),
])
def test_montos_enormes_se_rechazan_con_mensaje(campo, activar):
    cambios = {campo: "1" + "0" * 26}
    if activar:
        cambios[activar] = True
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(**cambios))
    assert exc.value.mensaje == MSG_MONTO_EXCESIVO
    assert exc.value.campo == campo


def test_monto_maximo_valido_se_puede_calcular():
    entrada = parsear_formulario(make_datos(
        salary="999999999999999999.99",
        has_bonuses=True, bonus_amount="999999999999999999.99",
        has_overtime=True, overtime_amount="999999999999999999.99",
        is_small_company=True, should_calculate_tax=True,
    ))
    res = calcular_gratificacion(entrada)
    assert res.gross_total_gratificacion > 0
    assert res.net_total_gratificacion == res.net_total_gratificacion.quantize(Decimal("0.01"))


@pytest.mark.parametrize("sueldo, esperado", [
    (1e16, Decimal("1E+16")),
    (1e-05, Decimal("0.00001")),
    (2500, Decimal("2500")),
])
def test_sueldo_numerico_en_notacion_cientifica(sueldo, esperado):
    entrada = parsear_formulario(make_datos(salary=sueldo))
    assert entrada.salary == esperado


@pytest.mark.parametrize("sueldo", [float("inf"), float("nan"), -1e16])
def test_sueldo_numerico_no_finito_o_negativo(sueldo):
    with pytest.raises(ErrorValidacion) as exc:
        parsear_formulario(make_datos(salary=sueldo))
    assert exc.value.mensaje == MSG_SUELDO_INVALIDO
