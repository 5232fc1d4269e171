# ABOUTME: Identifiers of the RDF, RDFS, XSD and YAGO vocabulary used across the pipeline
# ABOUTME: Also carries the built-in literal datatype hierarchy every schema snapshot starts from

# RDF / RDFS
RDF_TYPE = "rdf:type"
RDFS_DOMAIN = "rdfs:domain"
RDFS_RANGE = "rdfs:range"
RDFS_SUBCLASS_OF = "rdfs:subClassOf"
RDFS_CLASS = "rdfs:Class"

# Literal datatypes
XSD_STRING = "xsd:string"
XSD_DATE = "xsd:date"
XSD_DECIMAL = "xsd:decimal"
XSD_INTEGER = "xsd:integer"
XSD_NON_NEGATIVE_INTEGER = "xsd:nonNegativeInteger"
XSD_ANY_URI = "xsd:anyURI"

# YAGO
OWL_THING = "owl:Thing"
YAGO_FUNCTION = "<yagoFunction>"
YAGO_LITERAL = "rdfs:Literal"
EXTRACTION_SOURCE = "<extractionSource>"
EXTRACTION_TECHNIQUE = "<extractionTechnique>"

# Schema relations read by the infobox stage
HAS_TYPE_CHECK_PATTERN = "<_hasTypeCheckPattern>"
INFOBOX_PATTERN = "<_infoboxPattern>"
INFOBOX_COMBINE = "<_infoboxCombine>"
INFOBOX_REPLACE = "<_infoboxReplace>"
TITLE_REPLACE = "<_titleReplace>"
IS_PREFERRED_MEANING_OF = "<isPreferredMeaningOf>"

# Relation identifiers ending with this marker are extracted inverted
INVERSE_MARKER = "->"

WIKIPEDIA_URL = "http://en.wikipedia.org/wiki/"

BUILTIN_DATATYPE_HIERARCHY: tuple[tuple[str, str], ...] = (
    (XSD_NON_NEGATIVE_INTEGER, XSD_INTEGER),
    (XSD_INTEGER, XSD_DECIMAL),
    (XSD_DECIMAL, YAGO_LITERAL),
    (XSD_DATE, YAGO_LITERAL),
    (XSD_STRING, YAGO_LITERAL),
    (XSD_ANY_URI, YAGO_LITERAL),
)
