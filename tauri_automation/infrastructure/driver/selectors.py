"""
Resolucion de selectores para localizar elementos de la UI.

Estrategias soportadas:
- css (default): se pasa tal cual
- xpath: se pasa tal cual
- text: match exacto del texto del nodo via XPath
- partial_text: el texto del nodo contiene el literal, via XPath

La resolucion es una transformacion pura de strings; no toca el transporte.
"""
from typing import Literal, Tuple, get_args

from selenium.webdriver.common.by import By

from tauri_automation.shared.exceptions import InvalidSelectorStrategyError


SelectorStrategy = Literal["css", "xpath", "text", "partial_text"]

SELECTOR_STRATEGIES: Tuple[str, ...] = get_args(SelectorStrategy)
DEFAULT_STRATEGY: SelectorStrategy = "css"

# Prefijos con los que un selector se interpreta como consulta de ruta
_PATH_QUERY_PREFIXES = ("/", "(", "./", "../")


def _escape_quotes(value: str) -> str:
    return value.replace("'", "\\'")


def resolve_selector(selector: str, strategy: str = DEFAULT_STRATEGY) -> str:
    """
    Traduce un selector y su estrategia al string que entiende el transporte.

    Args:
        selector: Selector o texto literal a buscar
        strategy: Una de SELECTOR_STRATEGIES

    Returns:
        Selector resuelto (CSS o XPath)

    Raises:
        InvalidSelectorStrategyError: Si la estrategia no es reconocida
    """
    if strategy in ("css", "xpath"):
        return selector
    if strategy == "text":
        return f"//*[text()='{_escape_quotes(selector)}']"
    if strategy == "partial_text":
        return f"//*[contains(., '{_escape_quotes(selector)}')]"
    raise InvalidSelectorStrategyError(strategy)


def locator_for(selector: str, strategy: str = DEFAULT_STRATEGY) -> Tuple[str, str]:
    """
    Construye la tupla (By, valor) de Selenium para un selector.

    Un selector css que parece una consulta de ruta (//div, (//a)[1]...)
    se envia como XPath, igual que el resto de estrategias.
    """
    resolved = resolve_selector(selector, strategy)
    if strategy == "css" and not resolved.startswith(_PATH_QUERY_PREFIXES):
        return By.CSS_SELECTOR, resolved
    return By.XPATH, resolved
