from app.models import Alumno, EntidadReceptora, Postulacion, Vacante
from app.core.security import get_password_hash
from tests.conftest import contar

ALUMNO_NUEVO = {
    "num_control": "S300",
    "nombre": "María",
    "apellido_paterno": "Torres",
    "apellido_materno": "Díaz",
    "fecha_nacimiento": "2003-01-20",
    "carrera": "Ingeniería Industrial",
    "semestre": "7",
    "turno": "Vespertino",
    "correo": "maria.torres@itc.mx",
    "password": "clave",
    "num_celular": "5550000300",
}


async def test_registrar_alumno(client, session_factory, escenario):
    response = await client.post("/api/v1/alumnos/", data=ALUMNO_NUEVO)

    assert response.status_code == 201
    async with session_factory() as session:
        alumno = await session.get(Alumno, "S300")
    assert alumno.contraseña == get_password_hash("clave")
    assert alumno.estatus is None


async def test_registrar_alumno_con_correo_repetido(client, escenario):
    response = await client.post(
        "/api/v1/alumnos/", data={**ALUMNO_NUEVO, "correo": "rh@acme.mx"}
    )
    assert response.status_code == 409


async def test_registrar_alumno_con_foto_invalida(client, escenario):
    response = await client.post(
        "/api/v1/alumnos/",
        data=ALUMNO_NUEVO,
        files={"foto": ("foto.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 400


async def test_actualizar_alumno_parcial(client, session_factory, escenario):
    response = await client.put("/api/v1/alumnos/S100", data={"turno": "Vespertino"})

    assert response.status_code == 200
    async with session_factory() as session:
        alumno = await session.get(Alumno, "S100")
    assert alumno.turno == "Vespertino"
    assert alumno.carrera == "Ingeniería en Sistemas"


async def test_actualizar_alumno_sin_campos(client, escenario):
    response = await client.put("/api/v1/alumnos/S100", data={})
    assert response.status_code == 400


async def test_listar_alumnos_pendientes_y_aceptados(client, escenario):
    response = await client.get("/api/v1/alumnos/")
    assert {a["num_control"] for a in response.json()["data"]} == {"S100", "S200"}

    assert (await client.put("/api/v1/alumnos/S100/aceptar")).status_code == 200

    response = await client.get("/api/v1/alumnos/", params={"estatus": "Aceptado"})
    assert [a["num_control"] for a in response.json()["data"]] == ["S100"]
    assert response.json()["data"][0]["nombre"] == "Ana López García"

    response = await client.get("/api/v1/alumnos/", params={"estatus": "Rechazado"})
    assert response.status_code == 404


async def test_cambiar_estatus_de_alumno_inexistente(client, escenario):
    response = await client.put("/api/v1/alumnos/S999/aceptar")
    assert response.status_code == 404


async def test_eliminar_alumno_solo_si_esta_aceptado(client, session_factory, escenario):
    response = await client.delete("/api/v1/alumnos/S200")
    assert response.status_code == 403

    await client.put("/api/v1/alumnos/S200/aceptar")
    response = await client.delete("/api/v1/alumnos/S200")

    assert response.status_code == 200
    assert await contar(session_factory, Alumno, Alumno.num_control == "S200") == 0
    assert await contar(session_factory, Postulacion, Postulacion.alumno_id == "S200") == 0


async def test_eliminar_alumno_con_practica_responde_409(client, escenario):
    await client.post("/api/v1/postulaciones/42/aceptar")
    await client.put("/api/v1/alumnos/S100/aceptar")

    response = await client.delete("/api/v1/alumnos/S100")
    assert response.status_code == 409


async def test_alumnos_de_asesor(client, escenario):
    response = await client.get("/api/v1/alumnos/asesor/1")
    assert len(response.json()["data"]) == 2

    response = await client.get("/api/v1/alumnos/asesor/99")
    assert response.status_code == 404


async def test_registrar_vacante_pendiente(client, escenario):
    response = await client.post(
        "/api/v1/vacantes/",
        json={
            "titulo": "QA Intern",
            "fecha_inicio": "2024-08-01T06:00:00.000Z",
            "fecha_final": "2024-12-15",
            "ciudad": "Saltillo",
            "tipo_trabajo": "Híbrido",
            "descripcion": "Pruebas automatizadas",
            "entidad_id": 3,
            "asesor_externo_id": 5,
        },
    )
    assert response.status_code == 201
    vacante_id = response.json()["data"]["vacante_id"]

    response = await client.get("/api/v1/vacantes/")
    pendientes = response.json()["data"]
    assert [v["vacante_id"] for v in pendientes] == [vacante_id]
    assert pendientes[0]["fecha_inicio"] == "2024-08-01"
    assert pendientes[0]["nombre_empresa"] == "Acme Software"
    assert pendientes[0]["nombre_asesor_externo"] == "Jorge"


async def test_vacantes_paginadas_y_por_entidad(client, escenario):
    response = await client.get("/api/v1/vacantes/paginadas/1/1")
    assert [v["vacante_id"] for v in response.json()["data"]] == [8]

    response = await client.get("/api/v1/vacantes/paginadas/2/1")
    assert [v["vacante_id"] for v in response.json()["data"]] == [7]

    response = await client.get("/api/v1/vacantes/entidad/3")
    assert [v["vacante_id"] for v in response.json()["data"]] == [8, 7]


async def test_actualizar_vacante_inexistente(client, escenario):
    response = await client.put(
        "/api/v1/vacantes/99",
        json={
            "titulo": "X",
            "fecha_inicio": "2024-01-01",
            "fecha_final": "2024-02-01",
            "ciudad": "X",
            "tipo_trabajo": "X",
            "descripcion": "X",
        },
    )
    assert response.status_code == 404


async def test_eliminar_vacante_con_sus_postulaciones(client, session_factory, escenario):
    response = await client.delete("/api/v1/vacantes/7")

    assert response.status_code == 200
    assert await contar(session_factory, Vacante, Vacante.vacante_id == 7) == 0
    assert await contar(session_factory, Postulacion, Postulacion.vacante_id == 7) == 0
    assert await contar(session_factory, Postulacion) == 1


async def test_eliminar_vacante_pendiente_responde_403(client, escenario):
    await client.put("/api/v1/vacantes/8/rechazar")
    response = await client.delete("/api/v1/vacantes/8")
    assert response.status_code == 403


async def test_registrar_y_aceptar_entidad(client, session_factory, escenario):
    response = await client.post(
        "/api/v1/entidades/",
        data={
            "nombre_entidad": "Nova Labs",
            "nombre_usuario": "nova",
            "direccion": "Calle 5",
            "categoria": "Investigación",
            "correo": "contacto@nova.mx",
            "password": "nova123",
            "num_celular": "5550000900",
        },
    )
    assert response.status_code == 201
    entidad_id = response.json()["data"]["insert_id"]

    response = await client.get("/api/v1/entidades/")
    assert [e["entidad_id"] for e in response.json()["data"]] == [entidad_id]

    await client.put(f"/api/v1/entidades/{entidad_id}/aceptar")
    async with session_factory() as session:
        entidad = await session.get(EntidadReceptora, entidad_id)
    assert entidad.estatus == "Aceptado"


async def test_eliminar_entidad_con_vacantes_responde_409(client, escenario):
    response = await client.delete("/api/v1/entidades/3")
    assert response.status_code == 409


async def test_practicas_de_entidad_y_de_alumno(client, escenario):
    assert (await client.get("/api/v1/practicas/alumno/S100")).status_code == 404

    await client.post("/api/v1/postulaciones/42/aceptar")

    response = await client.get("/api/v1/practicas/alumno/S100")
    practica = response.json()["data"]
    assert practica["titulo_vacante"] == "Backend Intern"
    assert practica["correo_asesor_externo"] == "jorge.salas@acme.mx"
    assert practica["num_celular_entidad"] == "5550000003"

    response = await client.get("/api/v1/practicas/entidad/3")
    assert [p["correo_alumno"] for p in response.json()["data"]] == ["ana.lopez@itc.mx"]


async def test_asesores_internos(client, escenario):
    response = await client.get("/api/v1/asesores-internos/")
    assert response.json()["data"] == [
        {"asesor_interno_id": 1, "nombre_completo": "Laura Méndez Ruiz"}
    ]


async def test_registrar_asesor_externo_en_entidad_inexistente(client, escenario):
    response = await client.post(
        "/api/v1/asesores-externos/",
        data={
            "nombre": "Pedro",
            "apellido_paterno": "Ríos",
            "apellido_materno": "Luna",
            "correo": "pedro@nova.mx",
            "password": "x",
            "num_celular": "5550000777",
            "entidad_id": "99",
        },
    )
    assert response.status_code == 404


async def test_endpoints_generales(client):
    assert (await client.get("/")).json()["status"] == "running"
    assert (await client.get("/health")).json() == {"status": "healthy"}
