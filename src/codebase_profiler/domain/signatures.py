"""Language signature registry.

A process-wide, read-only table built once at import time.  Records are
frozen and the index is a ``MappingProxyType``, so worker threads may read it
concurrently without locking.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping

from codebase_profiler.domain.entities import LanguageCategory, LanguageSignature

_M = re.MULTILINE
_I = re.IGNORECASE

_JS_DECLARATION = r"const|let|var|function|class|import|export"


def _signature(
    name: str,
    *,
    extensions: Iterable[str],
    patterns: Iterable[str | tuple[str, int]],
    keywords: str,
    category: LanguageCategory,
    ecosystem: str,
    features: Iterable[str] = (),
    syntax: str | None = None,
    shebang: str | None = None,
) -> LanguageSignature:
    compiled = tuple(
        re.compile(p[0], p[1]) if isinstance(p, tuple) else re.compile(p)
        for p in patterns
    )
    return LanguageSignature(
        name=name,
        extensions=tuple(extensions),
        content_patterns=compiled,
        keywords=frozenset(keywords.split()),
        category=category,
        ecosystem=ecosystem,
        features=tuple(features),
        syntax_shape=re.compile(syntax) if syntax else None,
        shebang=re.compile(shebang) if shebang else None,
    )


# ── Programming languages ───────────────────────────────────────────────────

_JAVASCRIPT = _signature(
    "javascript",
    extensions=(".js", ".mjs", ".cjs", ".jsx", ".es6", ".es"),
    patterns=(
        r"\b(?:function|const|let|var|class|import|export|require)\b",
        r"\bconsole\.(?:log|error|warn|info)\b|\b(?:document|window|global)\.",
        r"\b(?:async|await|Promise)\b|\.then\(",
        r"=>\s*[{(]?",
        r"\$\{[^}]*\}",
        r"\bJSON\.(?:parse|stringify)\b|\bparse(?:Int|Float)\b",
        r"\b(?:setTimeout|setInterval|clearTimeout|clearInterval)\b",
        r"\b(?:add|remove)EventListener\b",
        r"\b(?:prototype|constructor|instanceof|typeof)\b",
        r"\bmodule\.exports\b",
    ),
    keywords=(
        "function const let var class import export async await return if "
        "else for while do switch case break continue try catch finally "
        "throw new this super"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="web",
    features=("dynamic-typing", "first-class-functions", "closures", "prototypal-inheritance"),
    syntax=rf"^\s*(?:{_JS_DECLARATION})\s",
    shebang=r"\bnode$",
)

_TYPESCRIPT = _signature(
    "typescript",
    extensions=(".ts", ".tsx", ".cts", ".mts"),
    patterns=(
        r"\b(?:interface|type|enum|namespace|declare|abstract)\s+\w+",
        r":\s*(?:string|number|boolean|any|void|unknown|never|object|bigint|symbol)\b",
        r"\w<[A-Z]\w*(?:\[\])?>",
        r"\b(?:public|private|protected|readonly|static|override)\s+\w+",
        r"\b(?:implements|keyof|infer|asserts)\b",
        r"\b(?:Record|Partial|Required|Pick|Omit|Exclude|Extract|NonNullable|ReturnType)<",
        r"\bas\s+(?:const|any|unknown|never)\b|\bsatisfies\b",
        r"\w\?\s*:",
        r":\s*\w+(?:\[\])?\s*\|\s*\w+",
        r"\bimport\s+type\b",
    ),
    keywords=(
        "interface type enum namespace implements extends declare abstract "
        "readonly keyof typeof infer is asserts satisfies"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="web",
    features=("static-typing", "generics", "decorators", "advanced-types"),
    # TypeScript accepts every JavaScript declaration line as well.
    syntax=(
        rf"^\s*(?:export\s+)?(?:declare\s+)?"
        rf"(?:interface|type|enum|namespace|abstract|{_JS_DECLARATION})\s"
    ),
)

_PYTHON = _signature(
    "python",
    extensions=(".py", ".pyw", ".pyi", ".pyx"),
    patterns=(
        (r"^\s*(?:def|class)\s+\w+.*:\s*$", _M),
        (r"^\s*(?:from\s+[\w.]+\s+)?import\s+[\w.]+", _M),
        r"\bself\.",
        (r"^\s*(?:try|except|finally|with|raise|elif)\b", _M),
        (r"^\s*#", _M),
        r"\b(?:lambda|yield|nonlocal)\b",
        r"\b(?:print|len|range|enumerate|zip|sorted|isinstance)\(",
        (r"^\s*@\w+", _M),
        r"\b__(?:init|str|repr|name|main)__\b",
        r"\bf[\"'][^\"']*\{[^}]*\}",
        r"\b(?:None|True|False)\b",
    ),
    keywords=(
        "def class import from if elif else try except finally with as lambda "
        "yield async await return pass break continue for while in not and or "
        "is None True False"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("dynamic-typing", "duck-typing", "list-comprehensions", "decorators", "context-managers"),
    syntax=r"^\s*(?:def|class|import|from|async\s+def)\s",
    shebang=r"python[0-9.]*$",
)

_JAVA = _signature(
    "java",
    extensions=(".java", ".jav"),
    patterns=(
        r"\b(?:public|private|protected)\s+(?:static\s+)?(?:final\s+)?[\w<>\[\]]+\s+\w+\s*\(",
        (r"^\s*package\s+[\w.]+;", _M),
        (r"^\s*import\s+(?:static\s+)?[\w.]+(?:\.\*)?;", _M),
        r"\bSystem\.(?:out|err)\.print(?:ln)?\b",
        r"\b(?:extends|implements|throws)\s+\w+",
        r"@(?:Override|Deprecated|SuppressWarnings|FunctionalInterface)\b",
        r"\b(?:ArrayList|HashMap|HashSet|LinkedList|TreeMap)\b",
        r"\b(?:Optional|Stream|Collectors)\b",
        r"\bnew\s+\w+(?:<[^>]*>)?\(",
        r"\bString\[\]\s+args\b",
    ),
    keywords=(
        "public private protected class interface package import extends "
        "implements static final abstract synchronized volatile transient "
        "native enum record sealed permits var new this super instanceof "
        "return if else switch case default for while do break continue try "
        "catch finally throw throws"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "object-oriented", "garbage-collection", "platform-independent"),
    syntax=r"^\s*(?:public|private|protected)\s+(?:\w+\s+)*(?:class|interface|enum|record)\s",
)

_CSHARP = _signature(
    "csharp",
    extensions=(".cs", ".csx", ".cake"),
    patterns=(
        (r"^\s*using\s+[\w.]+;", _M),
        r"\bnamespace\s+[\w.]+",
        r"\b(?:public|private|protected|internal)\s+(?:static\s+)?(?:partial\s+)?(?:class|struct|interface|record)\b",
        r"\bConsole\.(?:WriteLine|Write|ReadLine)\b",
        (r"^\s*\[\w+(?:\(.*\))?\]\s*$", _M),
        r"\b(?:Task|ValueTask)<|\bConfigureAwait\b",
        r"\bI(?:Enumerable|Queryable|List|Dictionary)<",
        r"\{\s*get;\s*(?:set;|init;)?\s*\}",
        r"\?\?|\?\.",
        r"\bvar\s+\w+\s*=\s*new\b",
    ),
    keywords=(
        "using namespace class interface struct enum record delegate public "
        "private protected internal static readonly const virtual override "
        "abstract sealed partial async await yield return ref out params get "
        "set init new this base typeof is as if else switch case default for "
        "foreach while do break continue try catch finally throw lock"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "object-oriented", "garbage-collection", "generics", "linq"),
    syntax=r"^\s*(?:public|private|protected|internal)\s+(?:\w+\s+)*(?:class|interface|struct)\s",
)

_PHP = _signature(
    "php",
    extensions=(".php", ".phtml", ".php3", ".php4", ".php5", ".php7", ".php8", ".phps"),
    patterns=(
        r"<\?php|<\?=",
        r"\$\w+",
        r"\bfunction\s+\w+\s*\(",
        r"\b(?:echo|print_r|var_dump|isset|unset|empty)\b",
        r"\$this->",
        r"\w::\w",
        r"\b(?:trait|namespace)\s+[\w\\]+",
        (r"^\s*use\s+[\w\\]+;", _M),
        r"\b__(?:construct|destruct|toString|get|set|call)\b",
        r"\barray\s*\(",
    ),
    keywords=(
        "function class interface trait namespace abstract final static "
        "public private protected const var extends implements use insteadof "
        "echo print return if else elseif endif switch case default "
        "endswitch for foreach endfor endforeach while endwhile do break "
        "continue try catch finally throw new clone instanceof yield"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="web",
    features=("dynamic-typing", "server-side", "web-focused", "traits"),
    syntax=r"^\s*(?:<\?php|class|function|namespace)\b",
    shebang=r"\bphp$",
)

_RUBY = _signature(
    "ruby",
    extensions=(".rb", ".rbw", ".rake", ".gemspec", ".ru", ".thor"),
    patterns=(
        (r"^\s*(?:def|class|module)\s+\w+", _M),
        (r"^\s*end\s*$", _M),
        r"\brequire(?:_relative)?\s+['\"]",
        r"\b(?:puts|pp)\s",
        r"@\w+|@@\w+",
        r"\b(?:unless|elsif|rescue|ensure)\b",
        r"\battr_(?:reader|writer|accessor)\b",
        r"\bdo\s*\|[^|]*\|",
        (r"\w\?\s*$|\bblock_given\?", _M),
        r"(?<![:\w]):[a-z_]\w*\s*(?:=>|,|\))",
    ),
    keywords=(
        "def class module end require require_relative include extend prepend "
        "attr_reader attr_writer attr_accessor private protected public if "
        "unless while until for in case when then else elsif begin rescue "
        "ensure retry return break next redo yield super self nil true false "
        "and or not"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("dynamic-typing", "metaprogramming", "blocks", "mixins", "duck-typing"),
    syntax=r"^\s*(?:def|class|module|require)\b",
    shebang=r"\bruby$",
)

_GO = _signature(
    "go",
    extensions=(".go",),
    patterns=(
        (r"^package\s+\w+", _M),
        (r"^import\s+(?:\(|\")", _M),
        r"\bfunc\s+(?:\([^)]*\)\s*)?\w+\s*\(",
        r"\bfmt\.(?:Print|Sprint|Fprint|Errorf)\w*\b",
        r":=",
        r"<-|\bchan\b",
        r"\b(?:go|defer)\s+\w",
        r"\berr\s*!=\s*nil\b",
        r"\btype\s+\w+\s+(?:struct|interface)\b",
        r"\b(?:make|append|len|cap)\(",
    ),
    keywords=(
        "package import func var const type struct interface map chan go "
        "defer select if else for range switch case default fallthrough "
        "break continue return goto make new len cap append copy delete close "
        "panic recover nil true false iota"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "compiled", "garbage-collection", "concurrency", "channels"),
    syntax=r"^\s*(?:package|import|func|type|var|const)\b",
)

_RUST = _signature(
    "rust",
    extensions=(".rs",),
    patterns=(
        r"\bfn\s+\w+\s*(?:<[^>]*>)?\s*\(",
        r"\blet\s+(?:mut\s+)?\w+",
        r"\b(?:println|print|panic|assert|assert_eq|vec|format|todo)!",
        r"\bimpl(?:<[^>]*>)?\s+\w+",
        (r"^\s*(?:pub\s+)?(?:use|mod)\s+[\w:]+", _M),
        r"\b(?:Option|Result|Some|None|Ok|Err|Vec|Box)\b",
        r"#\[derive\(",
        r"&(?:mut\s+)?\w+|&'\w+",
        r"\bmatch\s+\w+",
        r"->\s*\w+",
    ),
    keywords=(
        "fn let mut const static struct enum impl trait type where unsafe "
        "extern async await pub use mod crate self super as dyn move ref "
        "match if else while for loop break continue return true false"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "memory-safety", "zero-cost-abstractions", "ownership", "borrowing"),
    syntax=r"^\s*(?:pub\s+)?(?:fn|struct|enum|impl|trait|use|mod)\b",
)

_CPP = _signature(
    "cpp",
    extensions=(".cpp", ".cxx", ".cc", ".c++", ".hpp", ".hxx", ".h++", ".hh"),
    patterns=(
        (r"^\s*#\s*include\s*<(?:iostream|vector|string|memory|map|algorithm)>", _M),
        r"\bstd::\w+",
        r"\b(?:cout|cin|cerr|endl)\b",
        r"\btemplate\s*<",
        r"\bnamespace\s+\w+",
        r"\b(?:virtual|override|constexpr|nullptr|noexcept)\b",
        r"\b(?:public|private|protected):",
        r"\b(?:unique_ptr|shared_ptr|make_unique|make_shared)\b",
        r"\b(?:static|dynamic|const|reinterpret)_cast<",
        r"\w::\w",
    ),
    keywords=(
        "class struct namespace template typename concept requires constexpr "
        "public private protected virtual override final static const mutable "
        "volatile explicit inline friend extern auto decltype nullptr true "
        "false this new delete sizeof typeid try catch throw noexcept if else "
        "switch case default for while do break continue return goto"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "manual-memory-management", "templates", "multiple-inheritance", "operator-overloading"),
    syntax=r"^\s*(?:#include|class|struct|namespace|template)\b",
)

_C = _signature(
    "c",
    extensions=(".c", ".h"),
    patterns=(
        (r"^\s*#\s*(?:include|define|ifdef|ifndef|endif|pragma)\b", _M),
        r"\b(?:printf|scanf|fprintf|sprintf|snprintf)\s*\(",
        r"\b(?:malloc|calloc|realloc|free)\s*\(",
        r"\b(?:memcpy|memset|strlen|strcpy|strcat|strcmp)\s*\(",
        r"\btypedef\s+(?:struct|enum|union)\b",
        r"\b(?:int|void|char)\s+\*?\w+\s*\(",
        r"\b(?:NULL|EOF|stdin|stdout|stderr|FILE)\b",
        r"\w->\w",
        r"\bsizeof\s*\(",
    ),
    keywords=(
        "int char float double void struct union enum typedef static extern "
        "register auto const volatile restrict inline signed unsigned short "
        "long if else while for do switch case default break continue return "
        "goto sizeof"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="backend",
    features=("static-typing", "manual-memory-management", "low-level", "portable"),
    syntax=r"^\s*(?:#include|int|char|float|double|void)\s",
)

_KOTLIN = _signature(
    "kotlin",
    extensions=(".kt", ".kts"),
    patterns=(
        r"\bfun\s+(?:<[^>]*>\s*)?[\w.]+\s*\(",
        r"\b(?:val|var)\s+\w+\s*[:=]",
        r"\b(?:data|sealed|open|inner)\s+class\b",
        r"\bcompanion\s+object\b",
        r"\b(?:listOf|mapOf|setOf|mutableListOf|mutableMapOf)\b",
        r"\bwhen\s*\(",
        r"\?\.|\?:|!!",
        r"\blateinit\b|\bby\s+lazy\b",
    ),
    keywords=(
        "fun class interface object data sealed enum annotation val var const "
        "lateinit by public private protected internal open final abstract "
        "override companion if else when for while do break continue return "
        "try catch finally throw it this super null true false"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="mobile",
    features=("static-typing", "null-safety", "interop-java", "coroutines"),
)

_SWIFT = _signature(
    "swift",
    extensions=(".swift",),
    patterns=(
        r"\bfunc\s+\w+\s*\(",
        r"\b(?:struct|protocol|extension)\s+\w+",
        r"\bimport\s+(?:UIKit|SwiftUI|Foundation|Combine)\b",
        r"\bguard\s+let\b|\bif\s+let\b",
        r"\b(?:weak|unowned|lazy|fileprivate)\s",
        r"@(?:State|Published|ObservedObject|main|objc|IBOutlet)\b",
        r"\?\?|\?\.",
        r"->\s*\w+",
    ),
    keywords=(
        "func class struct enum protocol extension typealias var let static "
        "lazy weak unowned override final open public internal fileprivate "
        "private if else guard switch case default for while repeat break "
        "continue return throw try catch defer self super nil true false"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="mobile",
    features=("static-typing", "optional-types", "arc", "protocol-oriented"),
)

_DART = _signature(
    "dart",
    extensions=(".dart",),
    patterns=(
        r"\bimport\s+['\"](?:package|dart):",
        r"\b(?:final|late|const)\s+\w+\s+\w+\s*=",
        r"\bvoid\s+main\s*\(",
        r"\b(?:StatelessWidget|StatefulWidget|Widget|BuildContext)\b",
        r"\bFuture<|\bStream<",
        r"@override\b",
        r"\b(?:mixin|factory|covariant)\s",
        r"\?\?|\?\.",
    ),
    keywords=(
        "class abstract interface mixin enum extension typedef var final "
        "const late static covariant factory operator get set if else switch "
        "case default for while do break continue return try catch finally "
        "throw rethrow async await yield sync this super null true false"
    ),
    category=LanguageCategory.PROGRAMMING,
    ecosystem="mobile",
    features=("static-typing", "null-safety", "async-await", "mixins"),
)

# ── Markup, data & config ───────────────────────────────────────────────────

_HTML = _signature(
    "html",
    extensions=(".html", ".htm", ".xhtml", ".shtml"),
    patterns=(
        r"</?[a-zA-Z][^>]*>",
        (r"<!DOCTYPE\s+html>", _I),
        r"<!--[\s\S]*?-->",
        r"\b(?:class|id|src|href|alt|title|style)\s*=",
        (r"<(?:html|head|body|div|span|p|a|img|script|link|meta)\b", _I),
    ),
    keywords=(
        "html head body div span p a img script style link meta title h1 h2 "
        "h3 ul ol li table tr td th form input button select option textarea"
    ),
    category=LanguageCategory.MARKUP,
    ecosystem="web",
    features=("markup", "semantic", "accessibility", "responsive"),
)

_CSS = _signature(
    "css",
    extensions=(".css", ".scss", ".sass", ".less", ".styl"),
    patterns=(
        r"[.#]?[a-zA-Z][\w-]*\s*\{",
        r"[a-zA-Z-]+\s*:\s*[^;{}]+;",
        r"@(?:media|import|keyframes|font-face|supports)\b",
        r"\b(?:color|background|margin|padding|border|display|position)\s*:",
        r"\d(?:px|em|rem|vh|vw|%)\b",
    ),
    keywords=(
        "color background margin padding border width height font display "
        "position flex grid transform transition animation opacity overflow "
        "float clear"
    ),
    category=LanguageCategory.MARKUP,
    ecosystem="web",
    features=("styling", "responsive", "animations", "grid", "flexbox"),
)

_JSON = _signature(
    "json",
    extensions=(".json", ".jsonc", ".json5"),
    patterns=(
        r"^\s*\{[\s\S]*\}\s*$",
        r"^\s*\[[\s\S]*\]\s*$",
        r"\"[^\"]*\"\s*:",
        r":\s*(?:\"[^\"]*\"|-?\d+(?:\.\d+)?|true|false|null)\s*[,}\]]",
    ),
    keywords="true false null",
    category=LanguageCategory.DATA,
    ecosystem="universal",
    features=("data-interchange", "lightweight", "human-readable"),
)

_YAML = _signature(
    "yaml",
    extensions=(".yaml", ".yml"),
    patterns=(
        (r"^\s*[a-zA-Z_][\w-]*\s*:(?:\s|$)", _M),
        (r"^\s*-\s+\S", _M),
        (r":\s*[|>][-+]?\s*$", _M),
        (r"^---\s*$", _M),
    ),
    keywords="true false null yes no on off",
    category=LanguageCategory.DATA,
    ecosystem="universal",
    features=("human-readable", "configuration", "serialization"),
)

_XML = _signature(
    "xml",
    extensions=(".xml", ".xsd", ".xsl", ".xslt", ".svg", ".rss", ".atom", ".csproj", ".plist"),
    patterns=(
        r"<\?xml[^>]*\?>",
        r"</?[a-zA-Z][\w:.-]*[^>]*>",
        r"<!--[\s\S]*?-->",
        r"<!\[CDATA\[[\s\S]*?\]\]>",
        r"\bxmlns(?::\w+)?=",
    ),
    keywords="version encoding standalone xmlns",
    category=LanguageCategory.MARKUP,
    ecosystem="universal",
    features=("structured-data", "extensible", "namespaces"),
)

_BASH = _signature(
    "bash",
    extensions=(".sh", ".bash", ".zsh", ".ksh"),
    patterns=(
        (r"^#!", _M),
        r"\$\{?[a-zA-Z_]\w*\}?",
        r"\b(?:then|fi|done|esac)\b",
        (r"^\s*(?:echo|printf|export|source|cd|mkdir|rm|cp|mv)\s", _M),
        r"\[\[?\s+-[a-z]\s",
        r"\|\s*(?:grep|sed|awk|sort|uniq|head|tail|xargs)\b",
    ),
    keywords=(
        "if then else elif fi for while do done case esac function return "
        "exit break continue in select until"
    ),
    category=LanguageCategory.SHELL,
    ecosystem="unix",
    features=("scripting", "automation", "system-administration"),
    shebang=r"\b(?:bash|sh|zsh)$",
)

_SQL = _signature(
    "sql",
    extensions=(".sql", ".ddl", ".dml"),
    patterns=(
        (r"\b(?:SELECT|INSERT|UPDATE|DELETE|CREATE|ALTER|DROP|TRUNCATE|MERGE)\b", _I),
        (r"\b(?:FROM|WHERE|JOIN|GROUP\s+BY|ORDER\s+BY|HAVING|LIMIT)\b", _I),
        (r"\b(?:TABLE|INDEX|VIEW|PROCEDURE|TRIGGER|SCHEMA)\b", _I),
        (r"\b(?:INTEGER|VARCHAR|TEXT|TIMESTAMP|DECIMAL|BOOLEAN)\b", _I),
        (r"\b(?:PRIMARY\s+KEY|FOREIGN\s+KEY|NOT\s+NULL|UNIQUE|CONSTRAINT)\b", _I),
        (r"^\s*--", _M),
    ),
    keywords=(
        "SELECT INSERT UPDATE DELETE CREATE ALTER DROP TRUNCATE FROM WHERE "
        "JOIN INNER LEFT RIGHT OUTER ON GROUP BY ORDER HAVING LIMIT OFFSET "
        "UNION AS DISTINCT EXISTS IN BETWEEN LIKE IS NULL AND OR NOT"
    ),
    category=LanguageCategory.QUERY,
    ecosystem="database",
    features=("declarative", "set-based", "acid-transactions"),
)


# ── Registry ────────────────────────────────────────────────────────────────

LANGUAGE_SIGNATURES: tuple[LanguageSignature, ...] = (
    _JAVASCRIPT,
    _TYPESCRIPT,
    _PYTHON,
    _JAVA,
    _CSHARP,
    _PHP,
    _RUBY,
    _GO,
    _RUST,
    _CPP,
    _C,
    _KOTLIN,
    _SWIFT,
    _DART,
    _HTML,
    _CSS,
    _JSON,
    _YAML,
    _XML,
    _BASH,
    _SQL,
)

SIGNATURES_BY_NAME: Mapping[str, LanguageSignature] = MappingProxyType(
    {sig.name: sig for sig in LANGUAGE_SIGNATURES}
)

# Position in the registry, used as the final tie-breaker when merging.
REGISTRY_ORDER: Mapping[str, int] = MappingProxyType(
    {sig.name: index for index, sig in enumerate(LANGUAGE_SIGNATURES)}
)
