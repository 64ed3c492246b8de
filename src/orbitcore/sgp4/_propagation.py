"""
SGP4 near-Earth propagation core in JAX.

The element record is turned into a flat parameter array once, at Python
time, by :func:`sgp4_init`: mean motion is converted from Kozai to Brouwer
form, and the secular gravity and drag coefficients are derived.
:func:`sgp4_propagate` is a pure JAX function of that array and the time
since epoch, suitable for ``jax.jit`` and ``jax.vmap``.

Only the near-Earth theory is implemented.  Orbits with periods of 225
minutes or more are propagated with the near-Earth equations and a
warning is logged at initialization.

Output positions and velocities are in km and km/s in the
true-equator, mean-equinox frame of the element set, which orbitcore
treats as J2000.
"""

from __future__ import annotations

import logging
from math import cos as _py_cos
from math import fabs as _py_fabs
from math import pi as _py_pi
from math import sin as _py_sin
from math import sqrt as _py_sqrt

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.errors import PropagationError
from orbitcore.sgp4._constants import DEG2RAD, WGS72, XPDOTP, EarthGravity
from orbitcore.sgp4._types import OrbitalElementRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Parameter index layout for the flat params array
# ---------------------------------------------------------------------------
_PARAM_NAMES = [
    # Gravity constants
    "radiusearthkm",
    "xke",
    "j2",
    # Record elements, SGP4 units
    "bstar",
    "ecco",
    "argpo",
    "inclo",
    "mo",
    "nodeo",
    # Brouwer mean motion
    "no_unkozai",
    "con41",
    # Secular coefficients
    "cc1",
    "cc4",
    "cc5",
    "d2",
    "d3",
    "d4",
    "delmo",
    "eta",
    "argpdot",
    "omgcof",
    "sinmao",
    "t2cof",
    "t3cof",
    "t4cof",
    "t5cof",
    "x1mth2",
    "x7thm1",
    "mdot",
    "nodedot",
    "xlcof",
    "xmcof",
    "nodecf",
    "aycof",
    "isimp",  # 0.0 or 1.0
]

_IDX = {name: i for i, name in enumerate(_PARAM_NAMES)}
_NUM_PARAMS = len(_PARAM_NAMES)

_I = _IDX  # alias for brevity in propagation code

_twopi = 2.0 * _py_pi

DEEP_SPACE_PERIOD_MIN = 225.0
"""Orbital period [min] from which the deep-space theory would apply."""

KEPLER_MAX_ITER = 10
KEPLER_TOL = 1.0e-12
KEPLER_MAX_STEP = 0.95


# ---------------------------------------------------------------------------
# Python-time initialization
# ---------------------------------------------------------------------------


def _initl(xke: float, j2: float, ecco: float, inclo: float, no: float) -> tuple:
    """Recover the Brouwer mean motion and auxiliary quantities.

    The Kozai to Brouwer conversion uses exactly two refinement steps of
    the semi-major axis, as the theory is calibrated to that truncation.

    Args:
        xke: Gravity constant xke.
        j2: J2 zonal harmonic.
        ecco: Eccentricity.
        inclo: Inclination [rad].
        no: Mean motion (Kozai) [rad/min].

    Returns:
        Tuple of computed quantities.
    """
    x2o3 = 2.0 / 3.0

    eccsq = ecco * ecco
    omeosq = 1.0 - eccsq
    rteosq = _py_sqrt(omeosq)
    cosio = _py_cos(inclo)
    cosio2 = cosio * cosio

    # Un-Kozai the mean motion
    ak = (xke / no) ** x2o3
    d1 = 0.75 * j2 * (3.0 * cosio2 - 1.0) / (rteosq * omeosq)
    del_ = d1 / (ak * ak)
    adel = ak * (1.0 - del_ * del_ - del_ * (1.0 / 3.0 + 134.0 * del_ * del_ / 81.0))
    del_ = d1 / (adel * adel)
    no = no / (1.0 + del_)

    ao = (xke / no) ** x2o3
    sinio = _py_sin(inclo)
    po = ao * omeosq
    con42 = 1.0 - 5.0 * cosio2
    con41 = -con42 - cosio2 - cosio2
    posq = po * po
    rp = ao * (1.0 - ecco)

    return (no, ao, con41, con42, cosio, cosio2, omeosq, posq, rp, rteosq, sinio)


def _record_elements(record: OrbitalElementRecord) -> dict[str, float]:
    """Record values in SGP4 working units (radians, radians/minute)."""
    return {
        "bstar": record.bstar,
        "ecco": record.eccentricity,
        "argpo": record.arg_perigee * DEG2RAD,
        "inclo": record.inclination * DEG2RAD,
        "mo": record.mean_anomaly * DEG2RAD,
        "nodeo": record.raan * DEG2RAD,
        "no_kozai": record.mean_motion / XPDOTP,
    }


def _drag_shape(perige: float, radiusearthkm: float) -> tuple[float, float]:
    """Atmospheric density parameters ``(s, qoms2t)`` for a perigee height.

    ``s`` is 78 km above 156 km perigee height, ``perige - 78`` km between
    98 and 156 km, and 20 km below 98 km.  Returned in Earth radii, with
    ``s`` offset by one Earth radius.
    """
    sfour = 78.0
    if perige < 156.0:
        sfour = perige - 78.0
        if perige < 98.0:
            sfour = 20.0
    qzms24 = ((120.0 - sfour) / radiusearthkm) ** 4
    return sfour / radiusearthkm + 1.0, qzms24


def sgp4_init(record: OrbitalElementRecord, gravity: EarthGravity = WGS72) -> Array:
    """Derive the SGP4 parameter array of an element record.

    This function runs at Python time (not under JIT).

    Args:
        record: Element record.
        gravity: Earth gravity model constants.

    Returns:
        Flat ``jnp.array`` of shape ``(_NUM_PARAMS,)``.

    Raises:
        PropagationError: If the eccentricity is outside ``[0, 1)`` (code
            1) or the mean motion is not positive (code 2).
    """
    elements = _record_elements(record)
    ecco = elements["ecco"]
    if not 0.0 <= ecco < 1.0:
        raise PropagationError(1, 0.0)
    if elements["no_kozai"] <= 0.0:
        raise PropagationError(2, 0.0)

    d: dict[str, float] = {name: 0.0 for name in _PARAM_NAMES}
    d.update({k: v for k, v in elements.items() if k in _IDX})
    d["radiusearthkm"] = gravity.radiusearthkm
    d["xke"] = gravity.xke
    d["j2"] = gravity.j2

    re = gravity.radiusearthkm
    j2 = gravity.j2
    j3oj2 = gravity.j3oj2
    argpo = elements["argpo"]
    mo = elements["mo"]
    bstar = elements["bstar"]
    temp4 = 1.5e-12
    x2o3 = 2.0 / 3.0

    (
        no_unkozai,
        ao,
        con41,
        con42,
        cosio,
        cosio2,
        omeosq,
        posq,
        rp,
        rteosq,
        sinio,
    ) = _initl(gravity.xke, j2, ecco, elements["inclo"], elements["no_kozai"])

    d["no_unkozai"] = no_unkozai
    d["con41"] = con41

    period = _twopi / no_unkozai
    if period >= DEEP_SPACE_PERIOD_MIN:
        logger.warning(
            "Catalog number %d has a %.1f min period; deep-space terms are not modelled",
            record.catalog_number,
            period,
        )

    isimp = 1 if rp < 220.0 / re + 1.0 else 0

    # Perigee height [km] selects the density profile
    perige = (rp - 1.0) * re
    sfour, qzms24 = _drag_shape(perige, re)

    pinvsq = 1.0 / posq
    tsi = 1.0 / (ao - sfour)
    eta = ao * ecco * tsi
    etasq = eta * eta
    eeta = ecco * eta
    psisq = _py_fabs(1.0 - etasq)
    coef = qzms24 * tsi**4
    coef1 = coef / psisq**3.5
    cc2 = (
        coef1
        * no_unkozai
        * (
            ao * (1.0 + 1.5 * etasq + eeta * (4.0 + etasq))
            + 0.375 * j2 * tsi / psisq * con41 * (8.0 + 3.0 * etasq * (8.0 + etasq))
        )
    )
    cc1 = bstar * cc2
    cc3 = 0.0
    if ecco > 1.0e-4:
        cc3 = -2.0 * coef * tsi * j3oj2 * no_unkozai * sinio / ecco
    x1mth2 = 1.0 - cosio2
    cc4 = (
        2.0
        * no_unkozai
        * coef1
        * ao
        * omeosq
        * (
            eta * (2.0 + 0.5 * etasq)
            + ecco * (0.5 + 2.0 * etasq)
            - j2
            * tsi
            / (ao * psisq)
            * (
                -3.0 * con41 * (1.0 - 2.0 * eeta + etasq * (1.5 - 0.5 * eeta))
                + 0.75 * x1mth2 * (2.0 * etasq - eeta * (1.0 + etasq)) * _py_cos(2.0 * argpo)
            )
        )
    )
    cc5 = 2.0 * coef1 * ao * omeosq * (1.0 + 2.75 * (etasq + eeta) + eeta * etasq)

    # Secular rates of mean anomaly, argument of perigee and node
    cosio4 = cosio2 * cosio2
    temp1 = 1.5 * j2 * pinvsq * no_unkozai
    temp2 = 0.5 * temp1 * j2 * pinvsq
    temp3 = -0.46875 * gravity.j4 * pinvsq * pinvsq * no_unkozai
    mdot = (
        no_unkozai
        + 0.5 * temp1 * rteosq * con41
        + 0.0625 * temp2 * rteosq * (13.0 - 78.0 * cosio2 + 137.0 * cosio4)
    )
    argpdot = (
        -0.5 * temp1 * con42
        + 0.0625 * temp2 * (7.0 - 114.0 * cosio2 + 395.0 * cosio4)
        + temp3 * (3.0 - 36.0 * cosio2 + 49.0 * cosio4)
    )
    xhdot1 = -temp1 * cosio
    nodedot = xhdot1 + (0.5 * temp2 * (4.0 - 19.0 * cosio2) + 2.0 * temp3 * (3.0 - 7.0 * cosio2)) * cosio

    omgcof = bstar * cc3 * _py_cos(argpo)
    xmcof = 0.0
    if ecco > 1.0e-4:
        xmcof = -x2o3 * coef * bstar / eeta

    # sgp4fix for divide by zero with xinco = 180 deg
    if _py_fabs(cosio + 1.0) > 1.5e-12:
        xlcof = -0.25 * j3oj2 * sinio * (3.0 + 5.0 * cosio) / (1.0 + cosio)
    else:
        xlcof = -0.25 * j3oj2 * sinio * (3.0 + 5.0 * cosio) / temp4

    delmotemp = 1.0 + eta * _py_cos(mo)

    d.update(
        cc1=cc1,
        cc4=cc4,
        cc5=cc5,
        delmo=delmotemp * delmotemp * delmotemp,
        eta=eta,
        argpdot=argpdot,
        omgcof=omgcof,
        sinmao=_py_sin(mo),
        t2cof=1.5 * cc1,
        x1mth2=x1mth2,
        x7thm1=7.0 * cosio2 - 1.0,
        mdot=mdot,
        nodedot=nodedot,
        xlcof=xlcof,
        xmcof=xmcof,
        nodecf=3.5 * omeosq * xhdot1 * cc1,
        aycof=-0.5 * j3oj2 * sinio,
        isimp=float(isimp),
    )

    # Higher-order drag terms for non-simplified orbits
    if isimp != 1:
        cc1sq = cc1 * cc1
        d["d2"] = 4.0 * ao * tsi * cc1sq
        temp = d["d2"] * tsi * cc1 / 3.0
        d["d3"] = (17.0 * ao + sfour) * temp
        d["d4"] = 0.5 * temp * ao * tsi * (221.0 * ao + 31.0 * sfour) * cc1
        d["t3cof"] = d["d2"] + 2.0 * cc1sq
        d["t4cof"] = 0.25 * (3.0 * d["d3"] + cc1 * (12.0 * d["d2"] + 10.0 * cc1sq))
        d["t5cof"] = 0.2 * (
            3.0 * d["d4"]
            + 12.0 * cc1 * d["d3"]
            + 6.0 * d["d2"] * d["d2"]
            + 15.0 * cc1sq * (2.0 * d["d2"] + cc1sq)
        )

    logger.debug(
        "Initialized SGP4 for catalog number %d (perigee %.1f km, simplified drag: %s)",
        record.catalog_number,
        perige,
        bool(isimp),
    )
    return jnp.array([d[name] for name in _PARAM_NAMES], dtype=get_dtype())


# ---------------------------------------------------------------------------
# SGP4 Propagation (JIT-compatible)
# ---------------------------------------------------------------------------


def _solve_kepler(u: Array, axnl: Array, aynl: Array) -> Array:
    """Solve the modified Kepler equation for ``E + w``.

    Newton steps are clipped to ``±KEPLER_MAX_STEP`` and the loop stops
    after ``KEPLER_MAX_ITER`` steps even if the tolerance is not reached.
    """

    def cond(state):
        _, tem5, ktr = state
        return (jnp.abs(tem5) >= KEPLER_TOL) & (ktr <= KEPLER_MAX_ITER)

    def body(state):
        eo1, _, ktr = state
        sineo1 = jnp.sin(eo1)
        coseo1 = jnp.cos(eo1)
        tem5 = 1.0 - coseo1 * axnl - sineo1 * aynl
        tem5 = (u - aynl * coseo1 + axnl * sineo1 - eo1) / tem5
        tem5 = jnp.clip(tem5, -KEPLER_MAX_STEP, KEPLER_MAX_STEP)
        return eo1 + tem5, tem5, ktr + 1

    init = (u, jnp.asarray(9999.9, dtype=u.dtype), jnp.asarray(1))
    eo1, _, _ = jax.lax.while_loop(cond, body, init)
    return eo1


def sgp4_propagate(params: Array, tsince: ArrayLike) -> tuple[Array, Array, Array]:
    """Propagate an SGP4 parameter array (JAX, JIT-compatible).

    Args:
        params: Flat parameter array from :func:`sgp4_init`.
        tsince: Time since epoch [min].

    Returns:
        Tuple of ``(r, v, error)``: position [km] and velocity [km/s] as
        3-element arrays, and the SGP4 error code (0 on success; 1
        eccentricity, 2 mean motion, 4 semi-latus rectum, 6 decayed).
        On error ``r`` and ``v`` are NaN.

    Examples:
        ```python
        import jax
        from orbitcore.sgp4 import parse_tle, sgp4_init, sgp4_propagate
        params = sgp4_init(parse_tle(line0, line1, line2))
        r, v, error = jax.jit(sgp4_propagate)(params, 1000.0)
        ```
    """
    twopi = 2.0 * jnp.pi
    x2o3 = 2.0 / 3.0

    # Unpack parameters
    p = params
    radiusearthkm = p[_I["radiusearthkm"]]
    xke = p[_I["xke"]]
    j2 = p[_I["j2"]]
    bstar = p[_I["bstar"]]
    ecco = p[_I["ecco"]]
    argpo = p[_I["argpo"]]
    inclo = p[_I["inclo"]]
    mo = p[_I["mo"]]
    nodeo = p[_I["nodeo"]]
    no_unkozai = p[_I["no_unkozai"]]
    con41 = p[_I["con41"]]
    cc1 = p[_I["cc1"]]
    cc4 = p[_I["cc4"]]
    cc5 = p[_I["cc5"]]
    d2 = p[_I["d2"]]
    d3 = p[_I["d3"]]
    d4 = p[_I["d4"]]
    delmo = p[_I["delmo"]]
    eta = p[_I["eta"]]
    argpdot = p[_I["argpdot"]]
    omgcof = p[_I["omgcof"]]
    sinmao = p[_I["sinmao"]]
    t2cof = p[_I["t2cof"]]
    t3cof = p[_I["t3cof"]]
    t4cof = p[_I["t4cof"]]
    t5cof = p[_I["t5cof"]]
    x1mth2 = p[_I["x1mth2"]]
    x7thm1 = p[_I["x7thm1"]]
    mdot = p[_I["mdot"]]
    nodedot = p[_I["nodedot"]]
    xlcof = p[_I["xlcof"]]
    xmcof = p[_I["xmcof"]]
    nodecf = p[_I["nodecf"]]
    aycof = p[_I["aycof"]]
    isimp = p[_I["isimp"]]

    vkmpersec = radiusearthkm * xke / 60.0

    # --- Update for secular gravity and atmospheric drag ---
    t = jnp.asarray(tsince, dtype=params.dtype)
    xmdf = mo + mdot * t
    argpdf = argpo + argpdot * t
    nodedf = nodeo + nodedot * t
    argpm = argpdf
    mm = xmdf
    t2 = t * t
    nodem = nodedf + nodecf * t2
    tempa = 1.0 - cc1 * t
    tempe = bstar * cc4 * t
    templ = t2cof * t2

    # Non-simplified orbit corrections
    is_not_simple = isimp < 0.5
    delomg = omgcof * t
    delmtemp = 1.0 + eta * jnp.cos(xmdf)
    delm = xmcof * (delmtemp * delmtemp * delmtemp - delmo)
    temp_corr = delomg + delm
    mm_ns = xmdf + temp_corr
    argpm_ns = argpdf - temp_corr
    t3 = t2 * t
    t4 = t3 * t
    tempa_ns = tempa - d2 * t2 - d3 * t3 - d4 * t4
    tempe_ns = tempe + bstar * cc5 * (jnp.sin(mm_ns) - sinmao)
    templ_ns = templ + t3cof * t3 + t4 * (t4cof + t * t5cof)

    mm = jnp.where(is_not_simple, mm_ns, mm)
    argpm = jnp.where(is_not_simple, argpm_ns, argpm)
    tempa = jnp.where(is_not_simple, tempa_ns, tempa)
    tempe = jnp.where(is_not_simple, tempe_ns, tempe)
    templ = jnp.where(is_not_simple, templ_ns, templ)

    nm = no_unkozai
    em = ecco
    inclm = inclo

    nm_ok = nm > 0.0

    am = (xke / nm) ** x2o3 * tempa * tempa
    nm = xke / am**1.5
    em = em - tempe

    em_ok = (em < 1.0) & (em >= -0.001)
    # Numerical floor, avoids division by zero for circular orbits
    em = jnp.maximum(em, 1.0e-6)

    mm = mm + no_unkozai * templ
    xlm = mm + argpm + nodem

    nodem = nodem % twopi
    argpm = argpm % twopi
    xlm = xlm % twopi
    mm = (xlm - argpm - nodem) % twopi

    sinim = jnp.sin(inclm)
    cosim = jnp.cos(inclm)

    # --- Long period periodics ---
    axnl = em * jnp.cos(argpm)
    temp_lp = 1.0 / (am * (1.0 - em * em))
    aynl = em * jnp.sin(argpm) + temp_lp * aycof
    xl = mm + argpm + nodem + temp_lp * xlcof * axnl

    # --- Solve Kepler's equation ---
    u = (xl - nodem) % twopi
    eo1 = _solve_kepler(u, axnl, aynl)
    sineo1 = jnp.sin(eo1)
    coseo1 = jnp.cos(eo1)

    # --- Short period preliminary quantities ---
    ecose = axnl * coseo1 + aynl * sineo1
    esine = axnl * sineo1 - aynl * coseo1
    el2 = axnl * axnl + aynl * aynl
    pl = am * (1.0 - el2)

    pl_ok = pl >= 0.0

    rl = am * (1.0 - ecose)
    rdotl = jnp.sqrt(am) * esine / rl
    rvdotl = jnp.sqrt(pl) / rl
    betal = jnp.sqrt(1.0 - el2)
    temp_sp = esine / (1.0 + betal)
    sinu = am / rl * (sineo1 - aynl - axnl * temp_sp)
    cosu = am / rl * (coseo1 - axnl + aynl * temp_sp)
    su = jnp.arctan2(sinu, cosu)
    sin2u = (cosu + cosu) * sinu
    cos2u = 1.0 - 2.0 * sinu * sinu
    temp_sp2 = 1.0 / pl
    temp1 = 0.5 * j2 * temp_sp2
    temp2 = temp1 * temp_sp2

    # --- Update for short period periodics ---
    mrt = rl * (1.0 - 1.5 * temp2 * betal * con41) + 0.5 * temp1 * x1mth2 * cos2u
    su = su - 0.25 * temp2 * x7thm1 * sin2u
    xnode = nodem + 1.5 * temp2 * cosim * sin2u
    xinc = inclm + 1.5 * temp2 * cosim * sinim * cos2u
    mvt = rdotl - nm * temp1 * x1mth2 * sin2u / xke
    rvdot = rvdotl + nm * temp1 * (x1mth2 * cos2u + 1.5 * con41) / xke

    # --- Orientation vectors ---
    sinsu = jnp.sin(su)
    cossu = jnp.cos(su)
    snod = jnp.sin(xnode)
    cnod = jnp.cos(xnode)
    sini = jnp.sin(xinc)
    cosi = jnp.cos(xinc)
    xmx = -snod * cosi
    xmy = cnod * cosi
    ux = xmx * sinsu + cnod * cossu
    uy = xmy * sinsu + snod * cossu
    uz = sini * sinsu
    vx = xmx * cossu - cnod * sinsu
    vy = xmy * cossu - snod * sinsu
    vz = sini * cossu

    # --- Position and velocity (km and km/s) ---
    _mr = mrt * radiusearthkm
    r = jnp.stack([_mr * ux, _mr * uy, _mr * uz])
    v = jnp.stack(
        [
            (mvt * ux + rvdot * vx) * vkmpersec,
            (mvt * uy + rvdot * vy) * vkmpersec,
            (mvt * uz + rvdot * vz) * vkmpersec,
        ]
    )

    # Error codes, first failing check wins
    decayed = mrt < 1.0
    error = jnp.where(
        ~nm_ok,
        2,
        jnp.where(~em_ok, 1, jnp.where(~pl_ok, 4, jnp.where(decayed, 6, 0))),
    )

    nan3 = jnp.full(3, jnp.nan, dtype=r.dtype)
    r = jnp.where(error == 0, r, nan3)
    v = jnp.where(error == 0, v, nan3)

    return r, v, error


def check_error(error: ArrayLike, tsince: float | None = None) -> None:
    """Raise :class:`PropagationError` for a non-zero SGP4 error code."""
    code = int(error)
    if code != 0:
        raise PropagationError(code, tsince)
