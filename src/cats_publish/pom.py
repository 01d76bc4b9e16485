"""Maven POM generation for cats-publish.

The published POM only carries coordinates: the project declares no
dependencies and no dependency resolution happens here.
"""

from __future__ import annotations

from xml.etree import ElementTree

from cats_publish.schemas import ProjectIdentity

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
POM_SCHEMA_LOCATION = f"{POM_NAMESPACE} https://maven.apache.org/xsd/maven-4.0.0.xsd"


def render_pom(identity: ProjectIdentity) -> bytes:
    """Render a minimal POM for the given coordinates.

    Args:
        identity: Project coordinates.

    Returns:
        UTF-8 encoded POM document with an XML declaration.

    Example:
        >>> b"<artifactId>cats4j</artifactId>" in render_pom(identity)
        True
    """
    ElementTree.register_namespace("", POM_NAMESPACE)
    ElementTree.register_namespace("xsi", XSI_NAMESPACE)

    project = ElementTree.Element(
        f"{{{POM_NAMESPACE}}}project",
        {f"{{{XSI_NAMESPACE}}}schemaLocation": POM_SCHEMA_LOCATION},
    )
    for tag, text in (
        ("modelVersion", "4.0.0"),
        ("groupId", identity.group),
        ("artifactId", identity.name),
        ("version", identity.version),
        ("packaging", "jar"),
    ):
        ElementTree.SubElement(project, f"{{{POM_NAMESPACE}}}{tag}").text = text

    ElementTree.indent(project, space="  ")
    return ElementTree.tostring(project, encoding="utf-8", xml_declaration=True) + b"\n"
