from __future__ import annotations

import io
from contextlib import contextmanager
from datetime import date, datetime

import pytest
import requests
from werkzeug.security import generate_password_hash

from student_portal.academics.model import AcademicPeriod
from student_portal.container import build_services
from student_portal.justifications.model import Justification, JustificationImage, JustificationType
from student_portal.legacy.host import LegacyHost
from student_portal.main import EXTENSION_KEY, create_app
from student_portal.schedules.model import Schedule
from student_portal.students.model import Student
from student_portal.students.profile_images import ProfileImageStore

TESTING = "student_portal.config.testing"


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Stands in for the legacy PHP host."""

    def __init__(self):
        self.uploaded = []
        self.existing = set()
        self.upload_error = None

    def post(self, url, files=None, timeout=None):
        if self.upload_error:
            raise self.upload_error
        name, data, content_type = files["imagen"]
        self.uploaded.append(name)
        return FakeResponse(200)

    def head(self, url, timeout=None, allow_redirects=False):
        return FakeResponse(200 if url in self.existing else 404)

    def close(self):
        pass


class InMemoryStudents:
    def __init__(self):
        self.by_dni = {
            "12345678": Student(
                dni="12345678",
                usuario="jperez",
                password_hash=generate_password_hash("demo1234"),
                nombres="Juan",
                apellidos="Pérez Quispe",
                programa_id=1,
                semestre_actual=3,
            )
        }
        self.updates = []

    def get_by_dni(self, dni):
        return self.by_dni.get(dni)

    def get_by_username(self, usuario):
        return next((s for s in self.by_dni.values() if s.usuario == usuario), None)

    def update_contact_field(self, *, dni, field, value):
        self.updates.append((dni, field.value, value))

    def set_profile_image(self, *, dni, filename):
        pass

    def get_qr_code_path(self, dni):
        return "/srv/qr_codes/12345678.png" if dni == "12345678" else None


class InMemoryAcademics:
    def get_current_period(self, today):
        return AcademicPeriod(1, "2024-I", date(2024, 3, 1), date(2024, 7, 31))

    def list_course_units(self, *, programa_id, semestre, periodo_id=None):
        return []

    def list_periods_with_units(self, *, programa_id):
        return [AcademicPeriod(1, "2024-I", date(2024, 3, 1), date(2024, 7, 31))]

    def list_grades(self, *, dni):
        return []


class _Writer:
    def __init__(self):
        self.justifications = []
        self.images = []

    def insert_justification(self, **row):
        self.justifications.append(row)
        return 100 + len(self.justifications)

    def insert_image(self, **row):
        self.images.append(row)
        return len(self.images)


class InMemoryJustifications:
    def __init__(self):
        self.justifications = []
        self.images = []

    @contextmanager
    def transaction(self):
        w = _Writer()
        yield w
        self.justifications.extend(w.justifications)
        self.images.extend(w.images)

    def list_for_student(self, *, dni):
        out = []
        for i, row in enumerate(self.justifications):
            jid = 101 + i
            if row["dni"] != dni:
                continue
            images = tuple(
                JustificationImage(n, img["nombre_archivo"], img["ruta_archivo"], img["fecha_subida"], img["tipo_archivo"])
                for n, img in enumerate(self.images, start=1)
                if img["justificacion_id"] == jid
            )
            out.append(
                Justification(
                    justificacion_id=jid,
                    dni_estudiante=row["dni"],
                    tipo_id=row["tipo_id"],
                    tipo_nombre="Enfermedad",
                    motivo=row["motivo"],
                    fecha_inicio=row["fecha_inicio"],
                    fecha_fin=row["fecha_fin"],
                    fecha_justificacion=row["fecha_justificacion"],
                    estado=row["estado"].value,
                    imagenes=images,
                )
            )
        return out

    def list_types(self):
        return [JustificationType(1, "Salud"), JustificationType(2, "Enfermedad")]


class InMemorySchedules:
    def get_latest_for_program(self, programa_id):
        if programa_id != 1:
            return None
        return Schedule(4, 1, "Horario 2024-I", "horario_dsi.pdf", datetime(2024, 3, 1, 8, 0, 0))


class EmptyAttendance:
    def list_for_student(self, *, dni, unidad_id=None):
        return []


class BrokenPayments:
    def list_types(self):
        raise RuntimeError("payments table is gone")

    def list_for_student(self, *, dni):
        return []


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def repos():
    return {
        "students": InMemoryStudents(),
        "justifications": InMemoryJustifications(),
    }


@pytest.fixture()
def app(session, repos, tmp_path):
    container = build_services(
        conn=None,
        legacy_host=LegacyHost("https://legacy.test", session=session),
        students_repo=repos["students"],
        academics_repo=InMemoryAcademics(),
        justifications_repo=repos["justifications"],
        schedules_repo=InMemorySchedules(),
        attendance_repo=EmptyAttendance(),
        payments_repo=BrokenPayments(),
        profile_images=ProfileImageStore(tmp_path),
    )
    return create_app(container=container, settings_module=TESTING)


@pytest.fixture()
def client(app):
    return app.test_client()


def _justification_form(**overrides):
    form = {
        "dni_estudiante": "12345678",
        "tipo_justificacion": "2",
        "motivo_estudiante": "illness",
        "fecha_inicio": "2024-03-01",
        "fecha_fin": "2024-03-05",
        "imagenes": [
            (io.BytesIO(b"\xff\xd8one"), "one.jpg", "image/jpeg"),
            (io.BytesIO(b"\xff\xd8two"), "two.jpg", "image/jpeg"),
        ],
    }
    form.update(overrides)
    return form


def test_submit_justification_end_to_end(client, session, repos):
    resp = client.post("/justificacion", data=_justification_form(), content_type="multipart/form-data")

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Justificación registrada exitosamente"
    urls = body["data"]["imageUrls"]
    assert len(urls) == 2
    assert all(u.startswith("https://legacy.test/imagenesJ/") for u in urls)
    assert [u.rsplit("/", 1)[1] for u in urls] == session.uploaded
    assert body["data"]["justificacionID"] == 101

    listed = client.get("/justificaciones/12345678").get_json()["data"]
    assert len(listed) == 1
    assert listed[0]["Estado"] == "Pendiente"
    assert [img["RutaArchivo"] for img in listed[0]["imagenes"]] == urls
    assert [img["TipoArchivo"] for img in listed[0]["imagenes"]] == ["image/jpeg", "image/jpeg"]


def test_plural_submit_route_accepts_documents_field(client, repos):
    form = _justification_form(imagenes=[], documentos=[(io.BytesIO(b"%PDF-1.4"), "cert.pdf", "application/pdf")])

    resp = client.post("/justificaciones", data=form, content_type="multipart/form-data")

    assert resp.status_code == 201
    assert repos["justifications"].images[0]["tipo_archivo"] == "application/pdf"


def test_submit_without_files_is_400_and_uploads_nothing(client, session, repos):
    resp = client.post("/justificacion", data=_justification_form(imagenes=[]), content_type="multipart/form-data")

    assert resp.status_code == 400
    assert "Todos los campos son requeridos" in resp.get_json()["message"]
    assert session.uploaded == []
    assert repos["justifications"].justifications == []


def test_submit_upload_failure_is_500_and_stores_nothing(client, session, repos):
    session.upload_error = requests.ConnectionError("legacy host down")

    resp = client.post("/justificacion", data=_justification_form(), content_type="multipart/form-data")

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Error al procesar la justificación", "error": "Error interno"}
    assert repos["justifications"].justifications == []


def test_student_without_justifications_gets_empty_list(client):
    resp = client.get("/justificaciones/87654321")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == []


def test_justification_types(client):
    data = client.get("/tipos_justificacion").get_json()["data"]

    assert data[1] == {"TipoJustificacionID": 2, "Nombre": "Enfermedad"}


def test_login(client):
    ok = client.post("/login", json={"usuario": "jperez", "clave": "demo1234"})
    bad = client.post("/login", json={"usuario": "jperez", "clave": "nope"})
    missing = client.post("/login", json={"usuario": "jperez"})

    assert ok.status_code == 200
    assert ok.get_json()["data"]["dni"] == "12345678"
    assert "password_hash" not in ok.get_json()["data"]
    assert bad.status_code == 401
    assert bad.get_json()["message"] == "Credenciales incorrectas"
    assert missing.status_code == 400


def test_profile_and_unknown_student(client):
    assert client.get("/estudiante/12345678").get_json()["data"]["periodo_academico"]["nombre"] == "2024-I"
    assert client.get("/estudiante/99999999").status_code == 404


def test_update_rejects_field_outside_allow_list(client, repos):
    resp = client.put("/estudiante/12345678/update", json={"field": "telefono", "value": "999"})

    assert resp.status_code == 400
    assert repos["students"].updates == []


def test_update_allowed_field(client, repos):
    resp = client.put("/estudiante/12345678/update", json={"field": "email", "value": "jp@iestp.edu.pe"})

    assert resp.status_code == 200
    assert repos["students"].updates == [("12345678", "email", "jp@iestp.edu.pe")]


def test_qr_code_is_flat(client):
    assert client.get("/estudiante/12345678/qr_code").get_json() == {
        "qr_code_url": "https://legacy.test/qr_codes/12345678.png"
    }
    assert client.get("/estudiante/87654321/qr_code").status_code == 404


def test_profile_image_upload_and_download(client):
    up = client.post(
        "/estudiante/12345678/imagen",
        data={"imagen": (io.BytesIO(b"\x89PNGdata"), "me.png", "image/png")},
        content_type="multipart/form-data",
    )
    down = client.get("/estudiante/12345678/imagen")

    assert up.status_code == 201
    assert up.get_json()["data"]["filename"] == "12345678.png"
    assert down.status_code == 200
    assert down.data == b"\x89PNGdata"


def test_schedule_found_only_when_pdf_is_reachable(client, session):
    assert client.get("/horario/1").status_code == 404

    session.existing.add("https://legacy.test/uploads/horario_dsi.pdf")
    resp = client.get("/horario/1")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["url"] == "https://legacy.test/uploads/horario_dsi.pdf"
    assert client.get("/horario/2").get_json()["message"] == "No se encontró horario para este programa de estudio"


def test_periods_attendance_and_grades(client):
    assert client.get("/estudiante/12345678/periodos").status_code == 200
    assert client.get("/estudiante/12345678/notas").get_json()["data"] == []
    resp = client.get("/estudiante/12345678/asistencias?unidad_id=abc")
    assert resp.status_code == 400


def test_unhandled_error_hides_detail_outside_debug(client):
    resp = client.get("/tipos_pago")

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Error interno del servidor", "error": "Error interno"}


def test_health_and_status(client):
    health = client.get("/health").get_json()

    assert health["status"] == "ok"
    assert health["database"] == "disconnected"
    assert {"uptime", "timestamp"} <= set(health)
    assert client.get("/status").get_json() == {"message": "Servidor activo y en funcionamiento"}


def test_requests_are_refused_while_shutting_down(app, client):
    app.config["SHUTTING_DOWN"] = True

    resp = client.get("/status")

    assert resp.status_code == 503
    assert resp.get_json()["message"] == "Servidor en proceso de apagado"


def test_container_is_exposed_on_app(app):
    assert app.extensions[EXTENSION_KEY].conn is None


def test_unknown_route_uses_json_error(client):
    resp = client.get("/no-existe")

    assert resp.status_code == 404
    assert "message" in resp.get_json()
