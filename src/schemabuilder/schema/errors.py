class SchemaBuilderError(RuntimeError):
    pass


class SchemaLoadError(SchemaBuilderError):
    pass


class TreeFileError(SchemaLoadError):
    pass


class SchemaDepthError(SchemaBuilderError):
    pass
