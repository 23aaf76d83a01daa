import typing

import yaml

from buildinit.loggers import logger
from buildinit.schema import API_VERSION

MANIFEST_EXTENSIONS = (".yaml", ".yml")

# Configs written by earlier runs carry this apiVersion group.
_OWN_API_GROUP = API_VERSION.split("/", 1)[0] + "/"


def _is_kubernetes_object(doc: typing.Any) -> bool:
    if not isinstance(doc, dict) or "apiVersion" not in doc or "kind" not in doc:
        return False
    return not str(doc["apiVersion"]).startswith(_OWN_API_GROUP)


def _collect_images(node: typing.Any, images: typing.List[str]):
    if isinstance(node, dict):
        for k, v in node.items():
            if k == "image" and isinstance(v, str):
                images.append(v)
            else:
                _collect_images(v, images)
    elif isinstance(node, list):
        for item in node:
            _collect_images(item, images)


def load_kubernetes_documents(path: str) -> typing.List[typing.Dict[str, typing.Any]]:
    """
    Loads the Kubernetes objects in the yaml file at ``path``. Documents without ``apiVersion`` and ``kind`` are
    dropped, and so are buildinit configs; a file that isn't valid yaml yields no documents.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            docs = list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:
            logger.warning(f"Skipping {path}, it is not valid yaml: {e}")
            return []
    return [d for d in docs if _is_kubernetes_object(d)]


def images_in_documents(docs: typing.Iterable[typing.Any]) -> typing.List[str]:
    """
    Returns every ``image`` value found in ``docs``, in document order. Duplicates are kept.
    """
    images: typing.List[str] = []
    for doc in docs:
        _collect_images(doc, images)
    return images


def read_kubernetes_manifest(path: str) -> typing.Optional[typing.List[str]]:
    """
    Returns the images referenced by the manifest at ``path``, or None if ``path`` is not a Kubernetes manifest.
    The file is read once.
    """
    if not path.endswith(MANIFEST_EXTENSIONS):
        return None
    try:
        docs = load_kubernetes_documents(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return None
    if not docs:
        return None
    return images_in_documents(docs)
