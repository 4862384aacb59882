"""
Herramientas de interaccion con la UI.
"""
from tauri_automation.application.dto import (
    ElementSelectorDTO,
    ToolResponse,
    TypeTextDTO,
    WaitForElementDTO,
    WaitForNavigationDTO,
)
from tauri_automation.infrastructure.driver import TauriDriver


async def click_element(driver: TauriDriver, params: ElementSelectorDTO) -> ToolResponse:
    """Hace click en un elemento."""
    try:
        await driver.click(params.selector, params.by)
        return ToolResponse.ok({"message": f"Click en elemento ({params.by}): {params.selector}"})
    except Exception as e:
        return ToolResponse.fail(e)


async def type_text(driver: TauriDriver, params: TypeTextDTO) -> ToolResponse:
    """Escribe texto en un input."""
    try:
        await driver.type_text(params.selector, params.text, params.clear, params.by)
        return ToolResponse.ok({"message": f"Texto escrito en elemento ({params.by}): {params.selector}"})
    except Exception as e:
        return ToolResponse.fail(e)


async def wait_for_element(driver: TauriDriver, params: WaitForElementDTO) -> ToolResponse:
    """Espera a que un elemento aparezca."""
    try:
        await driver.wait_for_element(params.selector, params.timeout, params.by)
        return ToolResponse.ok({"message": f"Elemento encontrado ({params.by}): {params.selector}"})
    except Exception as e:
        return ToolResponse.fail(e)


async def wait_for_navigation(driver: TauriDriver, params: WaitForNavigationDTO) -> ToolResponse:
    """Espera a que la URL cambie."""
    try:
        url = await driver.wait_for_navigation(params.url_contains, params.timeout)
        return ToolResponse.ok({"message": f"Navegacion completada: {url}", "url": url})
    except Exception as e:
        return ToolResponse.fail(e)


async def get_element_text(driver: TauriDriver, params: ElementSelectorDTO) -> ToolResponse:
    """Obtiene el texto de un elemento."""
    try:
        text = await driver.get_element_text(params.selector, params.by)
        return ToolResponse.ok({"text": text})
    except Exception as e:
        return ToolResponse.fail(e)
