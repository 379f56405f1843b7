GENERATE_STAGES = [
    ("load_config", "Load config"),
    ("load_tree", "Load property tree"),
    ("generate", "Generate schema"),
    ("check_schema", "Check schema"),
    ("write_output", "Write output"),
]

IMPORT_STAGES = [
    ("load_config", "Load config"),
    ("fetch_document", "Fetch document"),
    ("analyze", "Analyze constructs"),
    ("parse", "Parse schema"),
    ("write_output", "Write output"),
]

INSPECT_STAGES = [
    ("load_config", "Load config"),
    ("fetch_document", "Fetch document"),
    ("parse", "Parse schema"),
]


STAGE_ORDER = {
    "generate": GENERATE_STAGES,
    "import": IMPORT_STAGES,
    "inspect": INSPECT_STAGES,
}
