app_name = "provider_availability"
app_title = "Provider Availability"
app_publisher = "Sebastian Ortiz Valencia"
app_description = "Disponibilidad, excepciones y citas resueltas en una linea de tiempo por fecha"
app_email = "sebastianortiz989@gmail.com"
app_license = "mit"

# Defaults
# ------------------
# Valores por defecto para Provider Settings cuando el proveedor no tiene
# configuracion guardada.

default_timezone = "UTC"

default_slot_duration_minutes = 30

# Estados de cita que se muestran en la linea de tiempo
visible_appointment_statuses = ["pending", "confirmed", "completed", "no_show"]

# Repository
# ------------------
# Backend usado por provider_availability.api cuando no se pasa un repository

repository_backend = "memory"

# Naming series por tipo de registro (ej: AVS-00001)
naming_series = {
	"Availability Slot": "AVS-",
	"Calendar Exception": "EXC-",
	"Appointment": "APT-",
}

# Logging
# ------------------

logger_name = "provider_availability"
