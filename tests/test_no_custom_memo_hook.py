"""Tests for the no-custom-memo-hook rule."""
import pytest

from no_manual_memo.rules.no_custom_memo_hook import (
    MEMO_ONLY_HOOK_BOTH,
    MEMO_ONLY_HOOK_CALLBACK,
    MEMO_ONLY_HOOK_MEMO,
)

RULE = 'no-custom-memo-hook'


class TestNotMemoOnly:
    """Hooks that do more than memoize, and things that are not hooks."""

    @pytest.mark.parametrize('code', [
        # calls useState
        """
        import React, { useState, useCallback } from 'react'

        function useCounter() {
            const [count, setCount] = useState(0)
            const increment = useCallback(() => setCount(c => c + 1), [])
            return { count, increment }
        }
        """,
        # calls useEffect
        """
        import React, { useEffect, useMemo } from 'react'

        function useWindowSize() {
            const [size, setSize] = useState({ width: 0, height: 0 })
            useEffect(() => {
                const handler = () => setSize({ width: window.innerWidth, height: window.innerHeight })
                window.addEventListener('resize', handler)
                return () => window.removeEventListener('resize', handler)
            }, [])
            const memoizedSize = useMemo(() => size, [size])
            return memoizedSize
        }
        """,
        # returns JSX
        """
        import React, { useCallback } from 'react'

        function useButton() {
            const handleClick = useCallback(() => {
                console.log('clicked')
            }, [])
            return <button onClick={handleClick}>Click me</button>
        }
        """,
        # JSX inside a memo callback
        """
        import React, { useMemo } from 'react'

        function useRender() {
            const render = useMemo(() => {
                return () => <div>Hello World</div>
            }, [])
            return render
        }
        """,
        # not hook-named
        """
        import React, { useCallback, useMemo } from 'react'

        function createHelpers() {
            const helper1 = useCallback(() => {}, [])
            const helper2 = useMemo(() => ({}), [])
            return { helper1, helper2 }
        }
        """,
        # React.useState through the namespace
        """
        import React from 'react'

        function useToggle() {
            const [value, setValue] = React.useState(false)
            const toggle = React.useCallback(() => setValue(v => !v), [])
            return [value, toggle]
        }
        """,
        # arrow hook calling another hook
        """
        import React, { useState, useCallback } from 'react'

        const useCounter = () => {
            const [count, setCount] = useState(0)
            const increment = useCallback(() => setCount(c => c + 1), [])
            return { count, increment }
        }
        """,
        # calls no hooks at all
        """
        function useMyAwesomeHook() {
            return {
                doSomething: () => console.log('something'),
            }
        }
        """,
        # declared but not assigned
        """
        import React, { useCallback } from 'react'

        let useSomething;
        """,
        # initialized to a non-function
        """
        import React, { useCallback } from 'react'

        const useSomething = 42;
        """,
        # not in a function
        """
        import React, { useCallback } from 'react'

        const callback = useCallback(() => {
            console.log("not in a function")
        }, [])
        """,
    ])
    def test_not_reported(self, lint, code):
        assert lint(code, RULE) == []


class TestMemoOnlyHooks:
    """Hooks whose only hooks are useMemo / useCallback."""

    def test_only_use_callback(self, lint):
        code = """
        import React, { useCallback } from 'react'

        function useCallbacks() {
            const callback1 = useCallback(() => {
                console.log('callback1')
            }, [])
            const callback2 = useCallback(() => {
                console.log('callback2')
            }, [])
            return { callback1, callback2 }
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_CALLBACK
        assert diagnostic.message.startswith(
            'Custom hook "useCallbacks" is a memo-only custom hook. It only calls the hook useCallback.'
        )
        assert diagnostic.fix is None
        assert diagnostic.line == 4

    def test_only_use_memo(self, lint):
        code = """
        import React, { useMemo } from 'react'

        function useMemoValues() {
            const value1 = useMemo(() => {
                return { expensive: 'calculation' }
            }, [])
            const value2 = useMemo(() => [1, 2, 3], [])
            return { value1, value2 }
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_MEMO
        assert '"useMemoValues"' in diagnostic.message

    def test_both_through_namespace(self, lint):
        code = """
        import React from 'react'

        function useReactMemo() {
            const callback = React.useCallback(() => {
                console.log('React callback')
            }, [])
            const value = React.useMemo(() => {
                return { react: 'memo' }
            }, [])
            return { callback, value }
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_BOTH
        assert 'It only calls the hooks useCallback and useMemo.' in diagnostic.message

    def test_arrow_hook(self, lint):
        code = """
        import React, { useCallback } from 'react'

        const useCallbacks = () => {
            const callback1 = useCallback(() => {
                console.log('callback1')
            }, [])
            const callback2 = useCallback(() => {
                console.log('callback2')
            }, [])
            return { callback1, callback2 }
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_CALLBACK
        assert '"useCallbacks"' in diagnostic.message

    def test_function_expression_hook(self, lint):
        code = """
        import React, { useMemo } from 'react'

        const useExpressionMemo = function() {
            const value = useMemo(() => {
                return { data: 'memoized' }
            }, [])
            return value
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_MEMO

    def test_complex_logic_but_only_memo_hooks(self, lint):
        code = """
        import React, { useCallback, useMemo } from 'react'

        export function useComplexMemo(data) {
            const processedData = useMemo(() => {
                if (!data) return []
                return data.map(item => ({ ...item, processed: true }))
            }, [data])

            const handleDelete = useCallback((id) => {
                return processedData.filter(item => item.id !== id)
            }, [processedData])

            return { data: processedData, deleteItem: handleDelete }
        }
        """
        (diagnostic,) = lint(code, RULE)
        assert diagnostic.message_id == MEMO_ONLY_HOOK_BOTH
