from __future__ import annotations

from dataclasses import dataclass

from .common import UnsupportedShapeError
from .generics import GenericSlots
from .members import (
    KIND_ERROR,
    KIND_GENERIC,
    KIND_PROTOCOL,
    KIND_TYPE,
    Argument,
    Initializer,
    Method,
    Property,
    ReturnValue,
)
from .naming import constructor_name, returns_owned, underscore
from .output import Output

CALLABLE_WHERE = "where Self: 'static + Sized"
DISPATCH_PANIC = 'Err(s) => panic!("{}", s),'


@dataclass(frozen=True)
class ArgumentRendering:
    parameter: str | None
    bound: str | None
    message: str
    forward: str | None


@dataclass(frozen=True)
class ReturnRendering:
    type: str
    bound: str | None
    value: str


UNIT_RETURN = ReturnRendering(type="()", bound=None, value="result")


@dataclass(frozen=True)
class CallableSignature:
    arguments: tuple[ArgumentRendering, ...]
    return_value: ReturnRendering

    @property
    def parameters(self) -> list[str]:
        return [item.parameter for item in self.arguments if item.parameter]

    @property
    def bounds(self) -> str:
        bounds = [item.bound for item in self.arguments if item.bound]
        if self.return_value.bound:
            bounds.append(self.return_value.bound)
        return f"<{', '.join(bounds)}>" if bounds else ""

    @property
    def message_arguments(self) -> str:
        values = [item.message for item in self.arguments]
        if len(values) == 1:
            return f"({values[0]},)"
        return f"({', '.join(values)})"

    @property
    def forwarded_arguments(self) -> str:
        return ", ".join(item.forward for item in self.arguments if item.forward)


def assign_generic_slots(
    owner: str,
    arguments: tuple[Argument, ...],
    return_value: ReturnValue | None = None,
) -> tuple[dict[int, str], str | None]:
    positions = [index for index, argument in enumerate(arguments) if argument.kind == KIND_PROTOCOL]
    wants_return = return_value is not None and return_value.kind == KIND_GENERIC
    # Slots come out last-declared-first, so the final position is bound to T0.
    slots = GenericSlots(owner).allocate(len(positions) + (1 if wants_return else 0))
    argument_slots = dict(zip(positions, slots))
    return argument_slots, (slots[-1] if wants_return else None)


def render_argument(argument: Argument, slot: str | None) -> ArgumentRendering:
    name = underscore(argument.name)
    if argument.kind == KIND_ERROR:
        return ArgumentRendering(parameter=None, bound=None, message=f"&mut {name}", forward=None)
    if argument.kind == KIND_PROTOCOL:
        return ArgumentRendering(
            parameter=f"{name}: &{slot}",
            bound=f"{slot}: 'static + {argument.value}",
            message=f"{name}.as_ptr()",
            forward=name,
        )
    if argument.kind == KIND_TYPE:
        return ArgumentRendering(parameter=f"{name}: {argument.value}", bound=None, message=name, forward=name)
    raise UnsupportedShapeError(f"unknown kind '{argument.kind}' on argument '{argument.name}'")


def render_return(return_value: ReturnValue | None, slot: str | None, owned: bool) -> ReturnRendering:
    if return_value is None:
        return UNIT_RETURN
    retained = "result" if owned else "result.retain()"
    if return_value.kind == KIND_PROTOCOL:
        return ReturnRendering(type=f"{return_value.value}ID", bound=None, value=retained)
    if return_value.kind == KIND_TYPE:
        return ReturnRendering(type=return_value.value, bound=None, value="result")
    if return_value.kind == KIND_GENERIC:
        return ReturnRendering(type=str(slot), bound=f"{slot}: 'static + {return_value.value}", value=retained)
    raise UnsupportedShapeError(f"unknown return kind '{return_value.kind}'")


def callable_signature(
    owner: str,
    selector: str,
    arguments: tuple[Argument, ...],
    return_value: ReturnValue | None = None,
) -> CallableSignature:
    argument_slots, return_slot = assign_generic_slots(owner, arguments, return_value)
    rendered = tuple(render_argument(argument, argument_slots.get(index)) for index, argument in enumerate(arguments))
    return CallableSignature(
        arguments=rendered,
        return_value=render_return(return_value, return_slot, returns_owned(selector)),
    )


def method_signature(method: Method) -> CallableSignature:
    owner = f'<method selector="{method.selector}">'
    return callable_signature(owner, method.selector, method.arguments, method.return_value)


def initializer_signature(initializer: Initializer) -> CallableSignature:
    owner = f'<initializer selector="{initializer.selector}">'
    return callable_signature(owner, initializer.selector, initializer.arguments)


def initializer_return_type(initializer: Initializer) -> str:
    if initializer.error_argument is not None:
        return f"Result<Self, {initializer.error_argument.value}ID>"
    return "Self"


def _declare_error_local(argument: Argument, o: Output) -> str:
    name = underscore(argument.name)
    o.line(f"let mut {name} = {argument.value}ID::nil();")
    o.blank()
    return name


def _return_error_if_set(name: str, o: Output) -> None:
    with o.block(f"if !{name}.is_nil()"):
        o.line(f"return Err({name});")
    o.blank()


def emit_method(method: Method, o: Output) -> None:
    signature = method_signature(method)
    result = signature.return_value
    error = method.error_argument
    parameters = ", ".join(["&self"] + signature.parameters)

    if error is not None:
        returns = f" -> Result<{result.type}, {error.value}ID>"
    else:
        returns = "" if result.type == "()" else f" -> {result.type}"

    header = f"fn {method.name}{signature.bounds}({parameters}){returns} {CALLABLE_WHERE}"
    with o.block(header, pad=True):
        error_name = _declare_error_local(error, o) if error is not None else None
        with o.block("unsafe"):
            send = f"objc::__send_message(self.as_object(), sel!({method.selector}), {signature.message_arguments})"
            with o.block(f"match {send}"):
                o.line(DISPATCH_PANIC)
                with o.block("Ok(r) =>"):
                    if error_name is not None:
                        _return_error_if_set(error_name, o)
                    o.line(f"let result: {result.type} = r;")
                    o.blank()
                    if error_name is not None:
                        o.line(f"return Ok({result.value});")
                    else:
                        o.line(f"return {result.value};")


def emit_initializer(initializer: Initializer, o: Output) -> None:
    signature = initializer_signature(initializer)
    error = initializer.error_argument
    parameters = ", ".join(["self"] + signature.parameters)

    header = (
        f"fn {initializer.name}{signature.bounds}({parameters}) -> "
        f"{initializer_return_type(initializer)} {CALLABLE_WHERE}"
    )
    with o.block(header, pad=True):
        error_name = _declare_error_local(error, o) if error is not None else None
        with o.block("unsafe"):
            send = f"objc::__send_message(self.as_object(), sel!({initializer.selector}), {signature.message_arguments})"
            with o.block(f"match {send}"):
                o.line(DISPATCH_PANIC)
                with o.block("Ok(result) =>"):
                    # The receiver's reference now belongs to the returned object.
                    o.line("std::mem::forget(self);")
                    o.blank()
                    if error_name is not None:
                        _return_error_if_set(error_name, o)
                        o.line("return Ok(result);")
                    else:
                        o.line("return result;")


def emit_constructor(owner: str, initializer: Initializer, o: Output) -> None:
    signature = initializer_signature(initializer)
    parameters = ", ".join(signature.parameters)
    header = (
        f"pub fn {constructor_name(initializer.selector)}{signature.bounds}({parameters}) -> "
        f"{initializer_return_type(initializer)} {CALLABLE_WHERE}"
    )
    with o.block(header):
        o.line(f"return {owner}ID::alloc().{initializer.name}({signature.forwarded_arguments});")


def emit_property(prop: Property, o: Output) -> None:
    getter = underscore(prop.getter)
    setter = underscore(prop.setter)
    argument = underscore(prop.name)

    if prop.kind == KIND_TYPE:
        with o.block(f"fn {getter}(&self) -> {prop.value} {CALLABLE_WHERE}", pad=True):
            with o.block("unsafe"):
                o.line("let target = self.as_object();")
                o.blank()
                with o.block(f"return match objc::__send_message(target, sel!({prop.getter}), ())"):
                    o.line(DISPATCH_PANIC)
                    o.line("Ok(r) => r")
        setter_header = f"fn {setter}(&self, {argument}: {prop.value}) {CALLABLE_WHERE}"
        setter_value = argument
    elif prop.kind == KIND_PROTOCOL:
        id_name = f"{prop.value}ID"
        with o.block(f"fn {getter}(&self) -> {id_name} {CALLABLE_WHERE}", pad=True):
            with o.block("unsafe"):
                o.line("let target = self.as_object();")
                o.blank()
                with o.block(f"match objc::__send_message(target, sel!({prop.getter}), ())"):
                    o.line(DISPATCH_PANIC)
                    with o.block("Ok(r) =>"):
                        o.line(f"let r: {id_name} = r;")
                        o.blank()
                        o.line("return r;" if prop.weak else "return r.retain();")
        setter_header = f"fn {setter}<T: 'static + ObjectiveC + {prop.value}>(&self, {argument}: &T) {CALLABLE_WHERE}"
        setter_value = f"{argument}.as_ptr()"
    else:
        raise UnsupportedShapeError(f"unknown kind '{prop.kind}' on property '{prop.name}'")

    if prop.read_only:
        return

    o.blank()
    with o.block(setter_header):
        with o.block("unsafe"):
            o.line("let target = self.as_object();")
            o.blank()
            with o.block(f"return match objc::__send_message(target, sel!({prop.setter}:), ({setter_value},))"):
                o.line(DISPATCH_PANIC)
                o.line("Ok(()) => ()")
