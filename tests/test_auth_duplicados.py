import pytest

from app.core.duplicados import celular_duplicado, correo_duplicado, existe_duplicado


async def test_login_alumno(client, escenario):
    response = await client.post(
        "/auth/login/alumno", json={"email": "ana.lopez@itc.mx", "password": "secreta"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["num_control"] == "S100"
    assert "contraseña" not in data


@pytest.mark.parametrize(
    "rol, correo, password",
    [
        ("entidad", "rh@acme.mx", "acme123"),
        ("asesor-interno", "laura.mendez@itc.mx", "asesor123"),
        ("asesor-externo", "jorge.salas@acme.mx", "externo123"),
    ],
)
async def test_login_por_rol(client, escenario, rol, correo, password):
    response = await client.post(f"/auth/login/{rol}", json={"email": correo, "password": password})
    assert response.status_code == 200
    assert response.json()["data"]["correo"] == correo


async def test_login_con_contraseña_incorrecta(client, escenario):
    response = await client.post(
        "/auth/login/alumno", json={"email": "ana.lopez@itc.mx", "password": "incorrecta"}
    )
    assert response.status_code == 401


async def test_login_correo_de_otro_rol(client, escenario):
    response = await client.post(
        "/auth/login/entidad", json={"email": "ana.lopez@itc.mx", "password": "secreta"}
    )
    assert response.status_code == 401


async def test_login_rol_desconocido(client, escenario):
    response = await client.post(
        "/auth/login/administrador", json={"email": "x@y.mx", "password": "x"}
    )
    assert response.status_code == 422


async def test_correo_duplicado_entre_tablas(db, escenario):
    assert await correo_duplicado(db, "rh@acme.mx")
    assert await correo_duplicado(db, "ana.lopez@itc.mx")
    assert not await correo_duplicado(db, "nuevo@itc.mx")


async def test_duplicado_excluye_el_propio_registro(db, escenario):
    assert not await correo_duplicado(db, "ana.lopez@itc.mx", "S100")
    assert await correo_duplicado(db, "ana.lopez@itc.mx", "S200")
    assert not await celular_duplicado(db, "5550000003", 3)
    assert not await celular_duplicado(db, "5550000003", "3")


async def test_duplicado_valor_vacio(db, escenario):
    assert not await celular_duplicado(db, "")
    assert not await correo_duplicado(db, None)


async def test_campo_no_verificable(db):
    with pytest.raises(ValueError):
        await existe_duplicado(db, "contraseña", "x")


async def test_endpoints_de_duplicados(client, escenario):
    response = await client.post("/api/v1/duplicados/correo", json={"valor": "rh@acme.mx"})
    assert response.json() == {"exists": True}

    response = await client.post(
        "/api/v1/duplicados/celular", json={"valor": "5550000100", "excluir_id": "S100"}
    )
    assert response.json() == {"exists": False}
