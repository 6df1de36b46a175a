"""bindpath - resolve {{path}} data bindings and drive binding autocomplete for document builders."""

from .autocomplete import AutocompleteController as AutocompleteController
from .autocomplete import PopupState as PopupState
from .autocomplete import Scheduler as Scheduler
from .autocomplete import find_active_fragment as find_active_fragment
from .context import Context as Context
from .context import resolved_value as resolved_value
from .context import with_binding_resolution as with_binding_resolution
from .explorer import ExplorerTreeController as ExplorerTreeController
from .insert import append_binding as append_binding
from .insert import binding_token as binding_token
from .insert import replace_fragment as replace_fragment
from .resolve import Resolver as Resolver
from .resolve import resolve as resolve
from .resolve import resolve_deep as resolve_deep
from .samples import DEFAULT_SAMPLE_DATA as DEFAULT_SAMPLE_DATA
from .samples import SampleCatalog as SampleCatalog
from .session import BindingField as BindingField
from .session import EditorSessionState as EditorSessionState
from .settings import BindingSettings as BindingSettings
from .suggest import SuggestionEngine as SuggestionEngine
from .suggest import SuggestionItem as SuggestionItem
from .tree import NodeKind as NodeKind
from .tree import PathNode as PathNode
from .tree import TreeIndex as TreeIndex
from .tree import children_of as children_of
