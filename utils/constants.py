"""
utils/constants.py

Purpose: Centralized static content

- Provider categories accepted by listings and profiles
- Contact click kinds
- User-facing messages for the verification flow

(Prevents hardcoding across the codebase)
"""

# ============================================================
# PROVIDER CATEGORIES
# ============================================================

SERVICE_CATEGORIES = (
    # Servicios para el hogar
    "Plomería",
    "Electricidad",
    "Herrería",
    "Carpintería",
    "Gas",
    "Informática",
    "Limpieza doméstica",
    "Fumigación",
    "Reparaciones generales",
    "Climatización (aires, calefacción)",
    "Colocación de pisos / revestimientos",
    "Vidriería",
    "Impermeabilización",
    "Rejas y estructuras metálicas",
    "Colocación de cortinas",
    "Mantenimiento de piletas",
    "Armado de muebles",
    "Persianas y toldos",

    # Servicios para el cuidado de la familia
    "Enfermería",
    "Medicina a domicilio",
    "Niñeras",
    "Acompañante terapéutico",
    "Psicólogos",
    "Fonoaudiólogos",
    "Maestras particulares",
    "Kinesiología",
    "Terapias alternativas",
    "Psicopedagogía",
    "Fisioterapia",
    "Cuidadores de adultos mayores",
    "Acompañamiento escolar",
    "Logopedas",
    "Musicoterapia",
    "Asistencia escolar a domicilio",

    # Lavadero y mantenimiento
    "Lavadero de ropa",
    "Lavadero de coches",
    "Tintorerías",
    "Limpieza de alfombras y tapizados",
    "Limpieza industrial / comercial",
    "Lavado de sillones",
    "Limpieza de cortinas",
    "Servicios de planchado",
    "Lavado de colchones",
    "Limpieza post obra",
    "Limpieza de piletas",
    "Limpieza de vidrios en altura",
    "Lavado de tapizados de autos",
    "Limpieza de tanques de agua",

    # Profesionales y técnicos
    "Abogados",
    "Contadores",
    "Traductores",
    "Asesores impositivos",
    "Ingenieros",
    "Arquitectos",
    "Desarrolladores de software",
    "Diseñadores gráficos",
    "Marketing digital",
    "Reparadores de electrodomésticos",
    "Técnicos electrónicos",
    "Electricistas matriculados",
    "Gestores administrativos",
    "Técnicos en refrigeración",
    "Técnicos de PC",
    "Diseñadores industriales",
    "Auditores",
    "Consultores empresariales",
    "Gestoría vehicular",
    "Peritos",
    "Agrimensores",
    "Topógrafos",
    "Fotógrafos profesionales",

    # Eventos y entretenimiento
    "Fotografía y video de eventos",
    "Música en vivo",
    "Animadores infantiles",
    "Catering",
    "Decoradores",
    "Alquiler de livings y mobiliario",
    "Pastelería para eventos",
    "Organización de fiestas",
    "Sonido e iluminación",
    "Magos / shows",
    "Carpas y gazebos para eventos",
    "Bartenders",
    "Alquiler de vajilla",
    "Wedding planners",
    "Food trucks",
    "Animación para adultos",
    "Cotillón personalizado",
    "Escenografía para eventos",

    # Transporte y logística
    "Fletes",
    "Mudanzas",
    "Moto mensajería",
    "Chofer particular",
    "Transportes especiales",
    "Delivery de productos voluminosos",
    "Transporte de personas",
    "Transporte de mascotas",
    "Cargas refrigeradas",
    "Transporte escolar",
    "Courier internacional",
    "Alquiler de camionetas",
    "Chofer profesional para empresas",
    "Distribución de correspondencia",
    "Traslados corporativos",
    "Camiones con hidrogrúa",

    # Animales y mascotas
    "Paseadores de perros",
    "Peluquería canina / felina",
    "Adiestradores",
    "Veterinarios a domicilio",
    "Guarderías caninas",
    "Venta de alimentos y accesorios",
    "Educación canina",
    "Etología animal",
    "Adopciones responsables",
    "Fotografía de mascotas",
    "Hospedaje para mascotas",
    "Terapias alternativas animales",
    "Spa para mascotas",
    "Adiestramiento felino",

    # Estética
    "Peluquería hombre, mujer y niños",
    "Barberías",
    "Cosmetología",
    "Manicura / Pedicura",
    "Maquillaje profesional",
    "Depilación",
    "Masajes estéticos",
    "Spa a domicilio",
    "Estética corporal",
    "Tratamientos faciales",
    "Microblading",
    "Diseño de cejas",
    "Peinados para eventos",
    "Uñas esculpidas",
    "Extensiones de pestañas",
    "Micropigmentación",
    "Limpieza facial profunda",
    "Bronceado sin sol",
    "Diseño de sonrisa estética",

    # Alimentos
    "Pastelería",
    "Huevos de Gallina",
)

VALID_CATEGORIES = frozenset(SERVICE_CATEGORIES)

# ============================================================
# VERIFICATION FLOW
# ============================================================

VERIFICATION_SMS_TEMPLATE = "Tu código de verificación en {brand} es: {code}"

CODE_SENT_MESSAGE = "Verification code sent by SMS."
CODE_SENT_DEV_MESSAGE = "Verification code generated (development mode, code included)."
PHONE_VERIFIED_MESSAGE = "Phone verified successfully."
CODES_CLEANED_MESSAGE = "Expired verification codes removed."

INVALID_PHONE_MESSAGE = "Phone number must start with '+' followed by 8 to 15 digits."
INVALID_CODE_FORMAT_MESSAGE = "Verification code must be exactly {length} digits."
ACCOUNT_NOT_FOUND_MESSAGE = "Account not found."
INCORRECT_CODE_MESSAGE = "Incorrect verification code."
CODE_EXPIRED_MESSAGE = "The verification code has expired."
RATE_LIMITED_MESSAGE = "Too many attempts. Please try again later."

# ============================================================
# AUTHENTICATION & PROFILE
# ============================================================

TOKEN_MISSING_MESSAGE = "Unauthorized access. Token missing."
TOKEN_INVALID_MESSAGE = "Invalid or expired token."
PROFILE_NOT_FOUND_MESSAGE = "Profile not found."
PROFILE_DELETED_MESSAGE = "Profile deleted (soft delete)."
PROFILES_PURGED_MESSAGE = "Permanent profile cleanup executed."

# ============================================================
# PROVIDERS & CLICKS
# ============================================================

SERVICE_NOT_FOUND_MESSAGE = "Service not found."
SERVICE_DELETED_MESSAGE = "Service deleted successfully."
INVALID_ID_MESSAGE = "Invalid ID."
INVALID_SERVICE_ID_MESSAGE = "Invalid serviceId."
