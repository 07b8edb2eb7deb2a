"""Demo: 打印 iTerm2 对象树和三种 session 解析结果"""

import iterm2

from itermgraph.app import App
from itermgraph.errors import ItermGraphError
from itermgraph.layout.tree import Leaf, Node
from itermgraph.telemetry import configure_logging
from itermgraph.transport.connection import ITerm2Transport


def format_tree(node: Node | None, indent: int = 0) -> list[str]:
    """把 split tree 渲染成缩进文本"""
    pad = "  " * indent
    if node is None:
        return [f"{pad}(empty)"]
    if isinstance(node, Leaf):
        return [f"{pad}- {node.pane_id or '(no id)'}"]
    lines = [f"{pad}+ split ({'vertical' if node.vertical else 'horizontal'})"]
    for child in node.children:
        lines.extend(format_tree(child, indent + 1))
    return lines


async def show_tree(app: App):
    """功能1: 打印 window/tab/session 树"""
    snapshot = await app.fetch_snapshot()
    if not snapshot.windows:
        print("没有找到任何 window")
        return
    for window in snapshot.windows:
        print(f"Window {window.window_id}")
        for tab in window.tabs:
            print(f"  Tab {tab.tab_id}")
            for line in format_tree(tab.root, indent=2):
                print(line)


async def show_resolutions(app: App):
    """功能2: 打印三种策略的解析结果"""
    resolvers = [
        ("current", app.get_current_session),
        ("active", app.get_active_session),
        ("tmux", app.get_tmux_session),
    ]
    for label, resolve in resolvers:
        try:
            session = await resolve()
            print(f"  {label:8} -> {session.window_id} / {session.tab_id} / {session.session_id}")
        except ItermGraphError as e:
            print(f"  {label:8} -> {e}")


async def main_menu(connection: iterm2.Connection):
    """主菜单"""
    app = App(ITerm2Transport(connection))
    while True:
        print("\n" + "=" * 40)
        print("  itermgraph Demo")
        print("=" * 40)
        print("  [1] 打印对象树")
        print("  [2] 解析 session")
        print("  [0] 退出")
        print("=" * 40)

        choice = input("请选择功能: ").strip()

        if choice == "1":
            await show_tree(app)
        elif choice == "2":
            await show_resolutions(app)
        elif choice == "0":
            print("再见!")
            break
        else:
            print("无效选择，请重试")


def main():
    """运行 demo"""
    configure_logging()
    iterm2.run_until_complete(main_menu)


if __name__ == "__main__":
    main()
