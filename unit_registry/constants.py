# unit_registry/constants.py
"""
Fixed enumerations shared by models, schemas, filters and reports.
Order matters: statistics and charts report categories in this order.
"""

# ── Vehicles ──────────────────────────────────────────────────────────────
VEHICLE_TYPES = [
    "Automóvel", "Motocicleta", "Camioneta", "Caminhonete", "Caminhão",
    "Ônibus", "Cam. Trator", "Triciclo", "Quadriciclo", "Trator de Rodas",
    "Semi-Reboque", "Motoneta", "Microônibus", "Reboque", "Ciclomotor", "Utilitário",
]

CITIES = ["Medianeira", "SMI", "Missal", "Itaipulândia", "Serranópolis"]

STATES = [
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG",
    "PA", "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE",
    "TO", "EX", "--",
]

NO_PLATE = "SEM PLACA"
NO_STATE = "--"

# ── Assets ────────────────────────────────────────────────────────────────
SECTORS = [
    "Sargenteação", "Comando", "Subcomando", "Copom e RPA",
    "Cozinha", "Lavanderia", "Banheiros e Lavacar", "Sala de Aula",
    "Rotam", "Academia", "Associação",
]

REMOVED_SECTOR = "Removido"

# Sectors an asset can be moved to (decommission included)
TRANSFER_SECTORS = SECTORS + [REMOVED_SECTOR]

ASSET_CLASSES = [
    "Mobiliário em geral",
    "Aparelhos e utensílios domésticos",
    "Equipamentos de processamento de dados",
    "Aparelhos e equipamentos para esporte e diversão",
    "Aparelhos ou equipamentos ou utensílios de médico-odontológico-hospitalar",
    "Equipamentos de proteção-segurança-socorro",
    "Equipamentos para áudio-vídeo-imagem",
    "Máquinas e equipamentos energéticos",
    "Máquinas e equipamentos agrícolas e rodoviários",
]

# Best to worst
CONSERVATION_STATES = ["Novo", "Bom", "Regular", "Ruim", "Inservível"]

INCORPORATION_TYPES = ["Aquisição/compra", "Doação"]

# ── Calendar ──────────────────────────────────────────────────────────────
EVENT_COLORS = [
    "#7C3AED",  # violet
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#06B6D4",  # cyan
]

# ── Reports ───────────────────────────────────────────────────────────────
CHART_COLORS = [
    "#4F46E5", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6",
    "#EC4899", "#06B6D4", "#84CC16", "#F97316", "#6366F1",
]
