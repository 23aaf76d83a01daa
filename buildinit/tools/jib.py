import os
import re
import typing
import xml.etree.ElementTree as ET

from buildinit.loggers import logger

JIB_MAVEN_PLUGIN = "jib-maven-plugin"
JIB_GRADLE_PLUGIN = "com.google.cloud.tools.jib"
GRADLE_BUILD_FILES = ("build.gradle", "build.gradle.kts")
DEFAULT_PARENT_RELATIVE_PATH = "../pom.xml"

_GRADLE_TO_BLOCK_IMAGE = re.compile(r"\bto\s*\{[^}]*?\bimage\s*=\s*['\"]([^'\"]+)['\"]", re.DOTALL)
_GRADLE_TO_DOTTED_IMAGE = re.compile(r"\bjib\.to\.image\s*=\s*['\"]([^'\"]+)['\"]")


class JibProject(typing.NamedTuple):
    image: typing.Optional[str]
    project: typing.Optional[str]


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(elem: ET.Element, name: str) -> typing.Optional[ET.Element]:
    for c in elem:
        if _local(c.tag) == name:
            return c
    return None


def _is_aggregated_module(path: str, root: ET.Element) -> bool:
    """
    True if the parent of the pom at ``path`` is a local pom whose ``<modules>`` list the directory of ``path``.
    Parents resolved from a repository, such as ``spring-boot-starter-parent`` with an empty ``<relativePath/>``,
    are not aggregators.
    """
    parent = _child(root, "parent")
    if parent is None:
        return False
    relative_path = _child(parent, "relativePath")
    relative = DEFAULT_PARENT_RELATIVE_PATH if relative_path is None else (relative_path.text or "").strip()
    if not relative:
        return False

    module_dir = os.path.dirname(os.path.abspath(path))
    parent_pom = os.path.normpath(os.path.join(module_dir, relative))
    if os.path.isdir(parent_pom):
        parent_pom = os.path.join(parent_pom, "pom.xml")
    if not os.path.isfile(parent_pom):
        return False
    try:
        modules = _child(ET.parse(parent_pom).getroot(), "modules")
    except (ET.ParseError, OSError) as e:
        logger.debug(f"Could not read parent pom {parent_pom}: {e}")
        return False
    if modules is None:
        return False

    parent_dir = os.path.dirname(parent_pom)
    for m in modules:
        if _local(m.tag) != "module" or not m.text:
            continue
        listed = os.path.normpath(os.path.join(parent_dir, m.text.strip()))
        if os.path.basename(listed) == "pom.xml":
            listed = os.path.dirname(listed)
        if listed == module_dir:
            return True
    return False


def read_maven_project(path: str) -> typing.Optional[JibProject]:
    """
    Returns the Jib settings of the pom.xml at ``path``, or None if it doesn't use the Jib Maven plugin.
    """
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        logger.warning(f"Skipping {path}, it could not be parsed: {e}")
        return None

    for plugin in root.iter():
        if _local(plugin.tag) != "plugin":
            continue
        artifact_id = _child(plugin, "artifactId")
        if artifact_id is None or (artifact_id.text or "").strip() != JIB_MAVEN_PLUGIN:
            continue
        image = None
        configuration = _child(plugin, "configuration")
        to = _child(configuration, "to") if configuration is not None else None
        image_elem = _child(to, "image") if to is not None else None
        if image_elem is not None and image_elem.text:
            image = image_elem.text.strip()
        # A module of a multi-module build is built through its aggregator, selected by artifactId.
        project = None
        module = _child(root, "artifactId")
        if module is not None and module.text and _is_aggregated_module(path, root):
            project = module.text.strip()
        return JibProject(image=image, project=project)
    return None


def read_gradle_project(path: str) -> typing.Optional[JibProject]:
    """
    Returns the Jib settings of the Gradle build file at ``path``, or None if it doesn't apply the Jib plugin.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping {path}, it could not be read: {e}")
        return None
    if JIB_GRADLE_PLUGIN not in content:
        return None
    m = _GRADLE_TO_BLOCK_IMAGE.search(content) or _GRADLE_TO_DOTTED_IMAGE.search(content)
    return JibProject(image=m.group(1) if m else None, project=None)
