"""SVG document loading and the node abstraction used by the tree walker."""

import logging
import xml.etree.ElementTree as ET  # nosec B405 - Parsing trusted SVG files only
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from ..core.constants import Namespaces, SVGAttributes, SVGTags
from ..core.error_handling import ParsingError

logger = logging.getLogger(__name__)


def _local_name(name: str) -> str:
    """Strip the ``{namespace}`` prefix from a tag name."""
    return name.split("}", 1)[1] if name.startswith("{") else name


def _attribute_name(name: str) -> str:
    """Convert an ElementTree attribute key to its conventional SVG name."""
    if not name.startswith("{"):
        return name
    namespace, local = name[1:].split("}", 1)
    prefix = Namespaces.PREFIXES.get(namespace)
    return f"{prefix}:{local}" if prefix else local


class TreeNode(ABC):
    """Capabilities the tree walker needs from a document node."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Local tag name."""

    @property
    @abstractmethod
    def attributes(self) -> Dict[str, str]:
        """Attribute mapping by name."""

    @property
    @abstractmethod
    def children(self) -> List["TreeNode"]:
        """Child elements in document order."""

    @property
    @abstractmethod
    def parent(self) -> Optional["TreeNode"]:
        """Parent element, or None for the root or a detached node."""

    @abstractmethod
    def clone(self) -> "TreeNode":
        """Deep copy detached from the tree."""

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attributes

    def set(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def iter(self) -> Iterator["TreeNode"]:
        """Iterate this node and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()


class SVGNode(TreeNode):
    """Element of a parsed SVG document."""

    def __init__(
        self,
        tag: str,
        attributes: Optional[Dict[str, str]] = None,
        parent: Optional["SVGNode"] = None,
    ) -> None:
        self._tag = tag
        self._attributes: Dict[str, str] = dict(attributes or {})
        self._children: List[SVGNode] = []
        self._parent = parent
        if parent is not None:
            parent._children.append(self)

    @classmethod
    def from_etree(
        cls, element: ET.Element, parent: Optional["SVGNode"] = None
    ) -> "SVGNode":
        """Build a node tree from an ElementTree element."""
        node = cls(
            _local_name(element.tag),
            {_attribute_name(key): value for key, value in element.attrib.items()},
            parent,
        )
        for child in element:
            # Comments and processing instructions have non-string tags
            if isinstance(child.tag, str):
                cls.from_etree(child, node)
        return node

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def attributes(self) -> Dict[str, str]:
        return self._attributes

    @property
    def children(self) -> List["SVGNode"]:
        return self._children

    @property
    def parent(self) -> Optional["SVGNode"]:
        return self._parent

    def clone(self) -> "SVGNode":
        copy = SVGNode(self._tag, self._attributes)
        for child in self._children:
            child_copy = child.clone()
            child_copy._parent = copy
            copy._children.append(child_copy)
        return copy

    def __repr__(self) -> str:
        node_id = self.get(SVGAttributes.ID)
        return f"<SVGNode {self._tag}{f' #{node_id}' if node_id else ''}>"


class SVGDocument:
    """Parsed SVG document with id lookup."""

    def __init__(self, root: TreeNode) -> None:
        self.root = root
        self._ids: Dict[str, TreeNode] = {}
        for node in root.iter():
            node_id = node.get(SVGAttributes.ID)
            if node_id and node_id not in self._ids:
                self._ids[node_id] = node

    @classmethod
    def from_string(cls, svg_text: str) -> "SVGDocument":
        """Parse an SVG document from text."""
        try:
            root = ET.fromstring(svg_text)  # nosec B314 - Parsing trusted SVG text
        except ET.ParseError as e:
            raise ParsingError(f"Invalid SVG file: {e}") from e
        return cls(SVGNode.from_etree(root))

    @classmethod
    def from_file(cls, svg_path: str | Path) -> "SVGDocument":
        """Parse an SVG document from a file."""
        try:
            tree = ET.parse(str(svg_path))  # nosec B314 - trusted user files
        except ET.ParseError as e:
            raise ParsingError(f"Invalid SVG file: {e}", {"file": str(svg_path)}) from e
        except FileNotFoundError as e:
            raise ParsingError(f"SVG file '{svg_path}' not found.") from e
        return cls(SVGNode.from_etree(tree.getroot()))

    def find_by_id(self, element_id: str) -> Optional[TreeNode]:
        """Get the first element in document order with the given id."""
        return self._ids.get(element_id)


def accept_node(node: TreeNode) -> bool:
    """Accept allow-listed SVG elements and reject everything else."""
    if node.tag in SVGTags.SUPPORTED:
        logger.debug(f"Allowing node: {node.tag}")
        return True

    logger.debug(f"Rejecting node: {node.tag}")
    return False


def iter_accepted(
    node: TreeNode, accept: Callable[[TreeNode], bool] = accept_node
) -> Iterator[TreeNode]:
    """Lazily yield the accepted children of ``node``.

    A rejected child is skipped together with its whole subtree.
    """
    for child in node.children:
        if accept(child):
            yield child
