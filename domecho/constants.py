from __future__ import annotations

from typing_extensions import Final

XML_NS: Final = "http://www.w3.org/XML/1998/namespace"
XMLNS_NS: Final = "http://www.w3.org/2000/xmlns/"
XSI_NS: Final = "http://www.w3.org/2001/XMLSchema-instance"
XSI_SCHEMA_LOCATION: Final = "{%s}schemaLocation" % XSI_NS
XSI_NO_NAMESPACE_SCHEMA_LOCATION: Final = "{%s}noNamespaceSchemaLocation" % XSI_NS

DOCUMENT_NAME: Final = "#document"
TEXT_NAME: Final = "#text"
COMMENT_NAME: Final = "#comment"
