from __future__ import annotations

from .common import UnsupportedShapeError
from .declarations import ClassDecl, ProtocolDecl
from .emit_callables import emit_constructor, emit_initializer, emit_method, emit_property
from .emit_leaves import emit_script
from .members import SCRIPT_ID, SCRIPT_TRAIT, Initializer, Method, Property, Script, Text
from .output import Output

BASE_CAPABILITY = "ObjectiveC"
RAW_POINTER = "*mut std::os::raw::c_void"


def emit_trait_member(member: object, o: Output) -> None:
    if isinstance(member, Initializer):
        emit_initializer(member, o)
    elif isinstance(member, Method):
        emit_method(member, o)
    elif isinstance(member, Property):
        emit_property(member, o)
    elif isinstance(member, Text):
        return
    else:
        raise UnsupportedShapeError(f"cannot emit {type(member).__name__} inside a protocol trait")


def emit_id_baseline(decl: ProtocolDecl, o: Output) -> None:
    id_name = f"{decl.name}ID"
    with o.block(f"pub fn from_ptr(ptr: {RAW_POINTER}) -> Self"):
        o.line(f"return {id_name}(ptr);")
    o.blank()
    with o.block("pub fn from_object(obj: &mut objc::runtime::Object) -> Self"):
        o.line(f"return {id_name}(obj as *mut objc::runtime::Object as {RAW_POINTER});")
    o.blank()
    with o.block("pub fn nil() -> Self"):
        o.line(f"return {id_name}(0 as {RAW_POINTER});")
    o.blank()
    with o.block("pub fn is_nil(&self) -> bool"):
        o.line("return self.0 as usize == 0;")

    if isinstance(decl, ClassDecl):
        o.blank()
        with o.block("pub fn alloc() -> Self"):
            o.line("return unsafe { msg_send![Self::class(), alloc] };")
        o.blank()
        with o.block("pub fn class() -> &'static objc::runtime::Class"):
            # Panics when the runtime has no class by this name.
            o.line(f'return objc::runtime::Class::get("{decl.name}").unwrap();')


def _emit_scripts(scripts: list[Script], o: Output) -> None:
    for script in scripts:
        o.blank()
        emit_script(script, o)


def emit_protocol(decl: ProtocolDecl, o: Output) -> None:
    id_name = f"{decl.name}ID"
    inheritance = " + ".join(decl.inherits) if decl.inherits else BASE_CAPABILITY

    with o.block(f"pub trait {decl.name} : {inheritance}", pad=True):
        for member in decl.children:
            if not isinstance(member, Script):
                emit_trait_member(member, o)
        _emit_scripts(decl.scripts(SCRIPT_TRAIT), o)
    o.blank()
    o.line(f"#[repr(C)] pub struct {id_name}({RAW_POINTER});")
    o.blank()
    with o.block(f"impl {id_name}"):
        emit_id_baseline(decl, o)
        for initializer in decl.initializers:
            o.blank()
            emit_constructor(decl.name, initializer, o)
        _emit_scripts(decl.scripts(SCRIPT_ID), o)
    o.blank()
    for inherit in list(decl.inherits) + [decl.name]:
        o.line(f"impl {inherit} for {id_name} {{}}")
    o.blank()
    with o.block(f"impl Clone for {id_name}"):
        with o.block("fn clone(&self) -> Self"):
            o.line("let ptr = self.as_ptr();")
            o.blank()
            o.line("return Self::from_ptr(ptr).retain();")
    o.blank()
    with o.block(f"impl Drop for {id_name}"):
        with o.block("fn drop(&mut self)"):
            with o.block("if !self.is_nil()"):
                o.line("unsafe { self.release() };")
    o.blank()
    with o.block(f"impl {BASE_CAPABILITY} for {id_name}"):
        with o.block(f"fn as_ptr(&self) -> {RAW_POINTER}"):
            o.line("return self.0;")
    o.blank()
    with o.block(f"unsafe impl objc::Encode for {id_name}"):
        with o.block("fn encode() -> objc::Encoding"):
            o.line('return unsafe { objc::Encoding::from_str("@") };')
    o.blank()
    with o.block(f"impl std::fmt::Debug for {id_name}"):
        with o.block("fn fmt(&self, f: &mut std::fmt::Formatter) -> std::fmt::Result"):
            o.line('return write!(f, "{}", self.debug_description().as_str());')
