import importlib

mod = "jsonql"
class LazyLoader:
    """
    Lazy loader for the jsonql classes and functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the names and their corresponding module paths
_mappings = {
    "GraphQLSchemaBuilder": (f"{mod}.schemabuilder", "GraphQLSchemaBuilder"),
    "SchemaConflictError": (f"{mod}.schemabuilder", "SchemaConflictError"),
    "JsonGraphQLApp": (f"{mod}.app", "JsonGraphQLApp"),
    "Snapshot": (f"{mod}.app", "Snapshot"),
    "SchemaNotReadyError": (f"{mod}.app", "SchemaNotReadyError"),
    "FileDocumentProvider": (f"{mod}.provider", "FileDocumentProvider"),
    "UrlDocumentProvider": (f"{mod}.provider", "UrlDocumentProvider"),
    "StaticDocumentProvider": (f"{mod}.provider", "StaticDocumentProvider"),
    "DocumentFetchError": (f"{mod}.provider", "DocumentFetchError"),
    "provider_for": (f"{mod}.provider", "provider_for"),
    "merge_objects": (f"{mod}.merge", "merge_objects"),
    "convert_json_to_graphql": (f"{mod}.jsontographql", "convert_json_to_graphql"),
    "query_json_document": (f"{mod}.jsontographql", "query_json_document"),
    "watch_json_document": (f"{mod}.jsontographql", "watch_json_document"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
