# -*- coding: utf-8 -*-
"""
Calculadora de Gratificación Perú (App Streamlit)

Interfaz de usuario: lee el formulario, lo valida con 'formulario', llama al
motor de cálculo y muestra el resultado con los helpers de 'presentacion'.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
import logging
from datetime import date

import streamlit as st

from formulario import ErrorValidacion, es_entrada_numerica, parsear_formulario
from motor import (
    PeriodoGratificacion,
    SEMESTER_MONTHS,
    TipoSeguro,
    calcular_gratificacion,
    calcular_meses_completos,
    fecha_corte_gratificacion,
)
from presentacion import (
    INFO_ASIGNACION_FAMILIAR,
    INFO_BONOS,
    INFO_HORAS_EXTRAS,
    INFO_PEQUENA_EMPRESA,
    INFO_RENTA,
    INFO_SEGURO,
    NOTA_REFERENCIAL,
    TEXTO_SIN_RESULTADO,
    TITULO_SIN_RESULTADO,
    filas_resultado,
    tabla_desglose,
)
from registro import configurar_logging

configurar_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    layout="wide",
    page_title="Calculadora de Gratificación",
    page_icon="🇵🇪"
)

# ==============================================================================
# --- ESTADO DE LA SESIÓN ---
# ==============================================================================

VALORES_INICIALES = {
    "in_sueldo": "",
    "in_meses": SEMESTER_MONTHS,
    "in_usar_fecha_ingreso": False,
    "in_fecha_ingreso": date(date.today().year, 1, 1),
    "in_periodo": PeriodoGratificacion.JULIO.value,
    "in_seguro": TipoSeguro.ESSALUD.value,
    "in_asig_familiar": False,
    "in_pequena_empresa": False,
    "in_bonos": False,
    "in_monto_bonos": "",
    "in_horas_extras": False,
    "in_monto_horas_extras": "",
    "in_renta": False,
}

for clave, valor in VALORES_INICIALES.items():
    st.session_state.setdefault(clave, valor)
st.session_state.setdefault("resultado", None)
st.session_state.setdefault("error_formulario", None)
st.session_state.setdefault("tema", "light")


def _valor(clave: str):
    """Valor actual de un widget; si Streamlit ya lo descartó, el inicial."""
    return st.session_state.get(clave, VALORES_INICIALES[clave])


def _alternar_tema():
    st.session_state["tema"] = "dark" if st.session_state["tema"] == "light" else "light"


def _limpiar_formulario():
    """Vuelve todos los widgets a sus valores iniciales y borra el resultado."""
    for clave, valor in VALORES_INICIALES.items():
        st.session_state[clave] = valor
    st.session_state["resultado"] = None
    st.session_state["error_formulario"] = None


def _meses_del_formulario() -> int:
    if _valor("in_usar_fecha_ingreso"):
        periodo = PeriodoGratificacion(_valor("in_periodo"))
        corte = fecha_corte_gratificacion(periodo, date.today().year)
        return calcular_meses_completos(_valor("in_fecha_ingreso"), corte)
    return _valor("in_meses")


def _calcular():
    """Callback del botón 'Calcular Gratificación'."""
    datos = {
        "salary": _valor("in_sueldo"),
        "months_worked": _meses_del_formulario(),
        "insurance_type": _valor("in_seguro"),
        "has_family_allowance": _valor("in_asig_familiar"),
        "is_small_company": _valor("in_pequena_empresa"),
        "has_bonuses": _valor("in_bonos"),
        "bonus_amount": _valor("in_monto_bonos"),
        "has_overtime": _valor("in_horas_extras"),
        "overtime_amount": _valor("in_monto_horas_extras"),
        "should_calculate_tax": _valor("in_renta"),
    }
    try:
        entrada = parsear_formulario(datos)
    except ErrorValidacion as e:
        st.session_state["error_formulario"] = e.mensaje
        st.session_state["resultado"] = None
        return

    st.session_state["error_formulario"] = None
    st.session_state["resultado"] = calcular_gratificacion(entrada)
    logger.info("Gratificación calculada para %s meses", entrada.months_worked)


# ==============================================================================
# --- SECCIÓN DE HELPERS DE UI ---
# ==============================================================================

def _campo_monto(etiqueta: str, clave: str, placeholder: str):
    st.text_input(etiqueta, key=clave, placeholder=placeholder)
    if not es_entrada_numerica(st.session_state[clave].strip()):
        st.caption(":red[Ingrese sólo números (use punto para decimales).]")


def mostrar_resultado_streamlit(resultado):
    """Panel derecho: resultado del cálculo o el estado vacío."""
    if resultado is None:
        st.subheader(TITULO_SIN_RESULTADO)
        st.caption(TEXTO_SIN_RESULTADO)
        return

    st.subheader("Resultado del Cálculo")
    for fila in filas_resultado(resultado):
        if fila.es_total:
            st.metric(fila.etiqueta, fila.valor)
        elif fila.es_descuento:
            st.markdown(f"**{fila.etiqueta}:** :red[`{fila.valor}`]")
        else:
            st.markdown(f"**{fila.etiqueta}:** `{fila.valor}`")

    with st.expander("Ver Desglose de la Remuneración Computable"):
        st.dataframe(tabla_desglose(resultado), hide_index=True, use_container_width=True)


# ==============================================================================
# === INICIO DE LA APLICACIÓN STREAMLIT ===
# ==============================================================================

CSS_TEMA_OSCURO = """
    <style>
    .stApp { background: linear-gradient(135deg, #0f172a, #111827); color: #f8fafc; }
    .stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3, .stApp span { color: #f8fafc; }
    div[data-testid="stMetricValue"] { color: #34d399; }
    </style>
"""

if st.session_state["tema"] == "dark":
    st.markdown(CSS_TEMA_OSCURO, unsafe_allow_html=True)

col_titulo, col_tema = st.columns([6, 1])
with col_titulo:
    st.title("Calculadora de Gratificación")
    st.caption("Estima tu gratificación en Perú de forma rápida y sencilla.")
with col_tema:
    etiqueta_tema = "☀️ Claro" if st.session_state["tema"] == "dark" else "🌙 Oscuro"
    st.button(etiqueta_tema, on_click=_alternar_tema, key="btn_tema")

col_form, col_resultado = st.columns(2)

# --- FORMULARIO ---
with col_form:
    _campo_monto("Sueldo Mensual Bruto (S/)", "in_sueldo", "Ej: 2500")
    if st.session_state["error_formulario"]:
        st.error(st.session_state["error_formulario"])

    st.checkbox(
        "Calcular meses desde mi fecha de ingreso",
        key="in_usar_fecha_ingreso",
        help="Base Legal: Art. 3, D.S. N° 005-2002-TR. Sólo se computan meses calendario completos."
    )
    if st.session_state["in_usar_fecha_ingreso"]:
        c1, c2 = st.columns(2)
        with c1:
            st.date_input("Fecha de Ingreso", key="in_fecha_ingreso", format="DD/MM/YYYY")
        with c2:
            st.selectbox(
                "Gratificación de",
                [p.value for p in PeriodoGratificacion],
                key="in_periodo",
            )
        st.caption(f"Meses completos en el semestre: **{_meses_del_formulario()}**")
    else:
        st.selectbox(
            "Meses Completos Trabajados (en el semestre)",
            list(range(1, SEMESTER_MONTHS + 1)),
            key="in_meses",
            format_func=lambda m: f"{m} mes{'es' if m > 1 else ''}",
        )

    st.divider()

    st.toggle("¿Recibes Asignación Familiar?", key="in_asig_familiar")
    if st.session_state["in_asig_familiar"]:
        st.info(INFO_ASIGNACION_FAMILIAR)

    st.toggle("¿Perteneces al régimen de pequeña empresa?", key="in_pequena_empresa")
    if st.session_state["in_pequena_empresa"]:
        st.info(INFO_PEQUENA_EMPRESA)

    st.toggle("¿Recibiste bonos o comisiones?", key="in_bonos")
    if st.session_state["in_bonos"]:
        st.info(INFO_BONOS)

    st.toggle("¿Horas Extras en 3 o más meses del semestre?", key="in_horas_extras")
    if st.session_state["in_horas_extras"]:
        st.info(INFO_HORAS_EXTRAS)

    st.toggle("¿Estimar Imp. a la Renta (5ta Cat.)?", key="in_renta")
    if st.session_state["in_renta"]:
        st.info(INFO_RENTA)

    if st.session_state["in_bonos"]:
        _campo_monto("Monto total de bonos/comisiones (últimos 6 meses)", "in_monto_bonos", "Ej: 1200")
    if st.session_state["in_horas_extras"]:
        _campo_monto("Monto total de Horas Extras (últimos 6 meses)", "in_monto_horas_extras", "Ej: 600")

    st.radio(
        "Tipo de Seguro de Salud",
        [t.value for t in TipoSeguro],
        key="in_seguro",
        horizontal=True,
    )
    st.info(INFO_SEGURO[TipoSeguro(st.session_state["in_seguro"])])

    b1, b2 = st.columns([1, 2])
    with b1:
        st.button("Limpiar", on_click=_limpiar_formulario, key="btn_limpiar", use_container_width=True)
    with b2:
        st.button(
            "Calcular Gratificación", on_click=_calcular, key="btn_calcular",
            type="primary", use_container_width=True,
        )

# --- RESULTADO ---
with col_resultado:
    mostrar_resultado_streamlit(st.session_state["resultado"])

st.divider()
st.caption(NOTA_REFERENCIAL)
