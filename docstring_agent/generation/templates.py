from dataclasses import dataclass


@dataclass(frozen=True)
class Template:
    example: str


_CSHARP_TEMPLATES = {
    "method": Template(
        example=(
            "/// <summary>\n"
            "/// Brief description of what the method does.\n"
            "/// </summary>\n"
            "/// <param name=\"paramName\">Description of parameter.</param>\n"
            "/// <returns>Description of return value.</returns>\n"
            "/// <exception cref=\"ExceptionType\">When this exception is thrown.</exception>"
        ),
    ),
    "class": Template(
        example=(
            "/// <summary>\n"
            "/// Brief description of the class and its purpose.\n"
            "/// </summary>"
        ),
    ),
    "property": Template(
        example=(
            "/// <summary>\n"
            "/// Gets or sets the property description.\n"
            "/// </summary>"
        ),
    ),
    "interface": Template(
        example=(
            "/// <summary>\n"
            "/// Defines the contract for interface purpose.\n"
            "/// </summary>"
        ),
    ),
    "enum": Template(
        example=(
            "/// <summary>\n"
            "/// Specifies the set of values the enumeration represents.\n"
            "/// </summary>"
        ),
    ),
}

_CSHARP_DEFAULT = Template(
    example="/// <summary>\n/// Brief description.\n/// </summary>",
)

_JAVA_TEMPLATES = {
    "method": Template(
        example=(
            "/**\n"
            " * Brief description of what the method does.\n"
            " *\n"
            " * @param paramName description of parameter\n"
            " * @return description of return value\n"
            " * @throws ExceptionType when this exception is thrown\n"
            " */"
        ),
    ),
}

_JAVA_DEFAULT = Template(
    example="/**\n * Brief description of the type and its purpose.\n */",
)

_GENERIC = Template(
    example="// Brief description.",
)


def get_template(language: str, element_type: str) -> Template:
    if language == "csharp":
        return _CSHARP_TEMPLATES.get(element_type, _CSHARP_DEFAULT)
    if language == "java":
        return _JAVA_TEMPLATES.get(element_type, _JAVA_DEFAULT)
    return _GENERIC
